"""
Assemble one QuestRecord from a quest's Java source.
"""

from typing import Dict, List

from .extractors import (
    extract_experience_rewards,
    extract_general_requirements,
    extract_item_requirement_names,
    extract_lamp_reward,
    extract_panels,
    extract_quest_points,
    extract_steps,
)
from .models import (
    PanelGrouping,
    QuestPanel,
    QuestRecord,
    QuestStep,
    RequirementSet,
    RewardSet,
    StepRecord,
)
from .resolver import AliasGraph


def build_panels(groupings: List[PanelGrouping], steps: Dict[str, StepRecord]) -> List[QuestPanel]:
    """Resolve each panel's step references in order; dangling references are dropped."""
    panels = []
    for grouping in groupings:
        panel = QuestPanel(panel_name=grouping.title)
        for ref in grouping.step_references:
            step = steps.get(ref)
            if step is not None:
                panel.steps.append(QuestStep(step.description, step.point))
        panels.append(panel)
    return panels


def resolve_item_requirements(names: List[str], graph: AliasGraph) -> List[str]:
    """Display text for each name, unresolved names dropped, duplicates removed in first-seen order."""
    out: List[str] = []
    for name in names:
        display = graph.resolve(name)
        if display and display not in out:
            out.append(display)
    return out


def extract_rewards(source: str) -> RewardSet:
    return RewardSet(
        quest_points=extract_quest_points(source),
        experience_rewards=extract_experience_rewards(source),
        lamp_reward=extract_lamp_reward(source),
    )


def extract_requirements(source: str) -> RequirementSet:
    skills, quests, quest_points = extract_general_requirements(source)
    graph = AliasGraph.from_source(source)
    return RequirementSet(
        skill_requirements=skills,
        quest_requirements=quests,
        quest_point_requirement=quest_points,
        item_requirements=resolve_item_requirements(extract_item_requirement_names(source), graph),
    )


def extract_quest(source: str, name: str) -> QuestRecord:
    """Run every extractor over source and build the canonical record for quest `name`."""
    rewards = extract_rewards(source)
    requirements = extract_requirements(source)
    panels = build_panels(extract_panels(source), extract_steps(source))
    return QuestRecord(
        name=name,
        quest_points=rewards.quest_points,
        experience_rewards=rewards.experience_rewards,
        lamp_rewards=rewards.lamp_reward,
        skill_requirements=requirements.skill_requirements,
        quest_requirements=requirements.quest_requirements,
        quest_point_requirement=requirements.quest_point_requirement,
        item_requirements=requirements.item_requirements,
        panels=panels,
    )
