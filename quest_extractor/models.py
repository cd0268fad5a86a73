"""
Quest records extracted from Quest Helper sources, and their JSON form
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class WorldPoint:
    x: int
    y: int
    plane: int

    def to_dict(self) -> Dict:
        return {"x": self.x, "y": self.y, "plane": self.plane}


@dataclass(frozen=True)
class StepRecord:
    variable_name: str
    description: str
    point: WorldPoint


@dataclass
class PanelGrouping:
    """A PanelDetails call: title plus the step variables it lists, in source order."""
    title: str
    step_references: List[str] = field(default_factory=list)


@dataclass
class QuestStep:
    step_description: str
    worldpoint: WorldPoint

    def to_dict(self) -> Dict:
        return {
            "stepDescription": self.step_description,
            "worldpoint": self.worldpoint.to_dict(),
        }


@dataclass
class QuestPanel:
    panel_name: str
    steps: List[QuestStep] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "panelName": self.panel_name,
            "steps": [step.to_dict() for step in self.steps],
        }


@dataclass
class ExperienceReward:
    skill: str
    xp: int

    def to_dict(self) -> Dict:
        return {"skill": self.skill, "xp": self.xp}


@dataclass
class LampReward:
    skills: str = "Any"
    value: int = 0
    quantity: int = 1

    def to_dict(self) -> Dict:
        return {"skills": self.skills, "value": self.value, "quantity": self.quantity}


@dataclass
class SkillRequirement:
    skill_name: str
    level: int

    def to_dict(self) -> Dict:
        return {"skillName": self.skill_name, "level": self.level}


@dataclass
class RewardSet:
    quest_points: int = 0
    experience_rewards: List[ExperienceReward] = field(default_factory=list)
    lamp_reward: Optional[LampReward] = None


@dataclass
class RequirementSet:
    skill_requirements: List[SkillRequirement] = field(default_factory=list)
    quest_requirements: List[str] = field(default_factory=list)
    quest_point_requirement: Optional[int] = None
    item_requirements: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuestRecord:
    """Canonical output for one quest. Built once by the assembler, never mutated."""
    name: str
    quest_points: int
    experience_rewards: List[ExperienceReward]
    lamp_rewards: Optional[LampReward]
    skill_requirements: List[SkillRequirement]
    quest_requirements: List[str]
    quest_point_requirement: Optional[int]
    item_requirements: List[str]
    panels: List[QuestPanel]

    @property
    def step_count(self) -> int:
        return sum(len(panel.steps) for panel in self.panels)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "questPoints": self.quest_points,
            "experienceRewards": [r.to_dict() for r in self.experience_rewards],
            "lampRewards": self.lamp_rewards.to_dict() if self.lamp_rewards else None,
            "skillRequirements": [r.to_dict() for r in self.skill_requirements],
            "questRequirements": list(self.quest_requirements),
            "questPointRequirement": self.quest_point_requirement,
            "itemRequirements": list(self.item_requirements),
            "steps": [panel.to_dict() for panel in self.panels],
        }
