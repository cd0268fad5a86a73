"""
Call-pattern extractors for Quest Helper quest classes.

Each extractor locates the member it reads (getQuestPointReward, setupSteps,
getPanels, ...) and scans only that body for one fixed call vocabulary.
A missing member or pattern gives an empty/default result, never an error.
"""

import re
from typing import Dict, List, Optional, Tuple

from .java_source import (
    identifier_tokens,
    member_body,
    read_call_arguments,
    read_string,
)
from .models import (
    ExperienceReward,
    LampReward,
    PanelGrouping,
    SkillRequirement,
    StepRecord,
    WorldPoint,
)
from .naming import enum_to_display

INT = r"(\d[\d_]*)"
SIGNED_INT = r"(-?\d[\d_]*)"

QUEST_POINT_REWARD_RE = re.compile(r"new\s+QuestPointReward\s*\(\s*" + INT + r"\s*\)")
EXPERIENCE_REWARD_RE = re.compile(
    r"new\s+ExperienceReward\s*\(\s*Skill\.(\w+)\s*,\s*" + INT + r"\s*\)"
)
SKILL_REQUIREMENT_RE = re.compile(r"new\s+SkillRequirement\s*\(\s*Skill\.(\w+)\s*,\s*" + INT)
QUEST_REQUIREMENT_RE = re.compile(r"QuestRequirement\s*\(\s*QuestHelperQuest\.(\w+)")
QUEST_POINT_REQUIREMENT_RE = re.compile(r"new\s+QuestPointRequirement\s*\(\s*" + INT + r"\s*\)")

LIST_LITERAL_RE = re.compile(r"\b(?:List\.of|Arrays\.asList)\s*\(")
PANEL_LIST_RE = re.compile(r"^(?:List\.of|Arrays\.asList|Collections\.singletonList)\s*\(")
ADD_CALL_RE = re.compile(r"\.add\s*\(\s*([A-Za-z_][A-Za-z0-9_]*)\s*\)")
PANEL_DETAILS_RE = re.compile(r"(?:new\s+)?\bPanelDetails\s*\(")

STEP_KINDS = ("NpcStep", "ObjectStep")
STEP_ASSIGN_RE = re.compile(
    r"\b([A-Za-z_][A-Za-z0-9_]*)\s*=\s*new\s+(?:" + "|".join(STEP_KINDS) + r")\s*\(\s*this\s*,"
    r"[^;]*?new\s+WorldPoint\s*\(\s*" + SIGNED_INT + r"\s*,\s*" + SIGNED_INT + r"\s*,\s*"
    + SIGNED_INT + r"\s*\)\s*,\s*\""
)

# Lamp rewards: candidate constructs, tried in order; first with a hit wins
LAMP_CANDIDATES: List[Tuple[str, "re.Pattern[str]"]] = [
    ("lamp-reward", re.compile(r"new\s+(?:LampReward|XpLampReward)\s*\([^)]*\)")),
    ("item-reward", re.compile(r"ItemReward\s*\(\s*\"[^\"]*[Ll][Aa][Mm][Pp][^\"]*\"\s*[^)]*\)")),
]

# Field patterns, tried in order within the matched lamp text
LAMP_SKILLS_PATTERNS = [
    re.compile(r"skills?\s*[=:]\s*\"([^\"]+)\""),
    re.compile(r"\"([^\"]*[Aa]ny[^\"]*)\""),
]
LAMP_VALUE_PATTERNS = [
    re.compile(r"value\s*[=:]\s*" + INT),
    re.compile(r"(\d{3,})"),
]
LAMP_QUANTITY_PATTERNS = [
    re.compile(r"quantity\s*[=:]\s*" + INT),
    re.compile(r",\s*" + INT + r"\s*\)"),
]


def _int(text: str) -> int:
    """Java integer literal, digit separators allowed."""
    return int(text.replace("_", ""))


def _first_group(patterns: List["re.Pattern[str]"], text: str) -> Optional[str]:
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            return m.group(1)
    return None


def extract_quest_points(source: str) -> int:
    """Quest points from getQuestPointReward(); 0 if absent."""
    m = QUEST_POINT_REWARD_RE.search(member_body(source, "getQuestPointReward"))
    return _int(m.group(1)) if m else 0


def extract_experience_rewards(source: str) -> List[ExperienceReward]:
    """Every ExperienceReward(Skill.X, xp) in getExperienceRewards(), in order, duplicates kept."""
    body = member_body(source, "getExperienceRewards")
    return [
        ExperienceReward(skill=m.group(1), xp=_int(m.group(2)))
        for m in EXPERIENCE_REWARD_RE.finditer(body)
    ]


def parse_lamp_text(text: str) -> LampReward:
    """Pull skills/value/quantity out of one lamp constructor's text."""
    skills = _first_group(LAMP_SKILLS_PATTERNS, text)
    value = _first_group(LAMP_VALUE_PATTERNS, text)
    quantity = _first_group(LAMP_QUANTITY_PATTERNS, text)
    return LampReward(
        skills=skills if skills is not None else "Any",
        value=_int(value) if value is not None else 0,
        quantity=_int(quantity) if quantity is not None else 1,
    )


def extract_lamp_reward(source: str) -> Optional[LampReward]:
    """Best-effort lamp reward from getItemRewards(); None when no lamp-like construct exists."""
    body = member_body(source, "getItemRewards")
    if not body:
        return None
    for _label, pattern in LAMP_CANDIDATES:
        m = pattern.search(body)
        if m:
            return parse_lamp_text(m.group(0))
    return None


def extract_general_requirements(source: str) -> Tuple[List[SkillRequirement], List[str], Optional[int]]:
    """
    Skill requirements, prerequisite quests and quest-point requirement
    from getGeneralRequirements().

    Returns (skill_requirements, quest_requirements, quest_point_requirement).
    Prerequisite quests are deduplicated keeping first occurrence.
    """
    body = member_body(source, "getGeneralRequirements")
    skills = [
        SkillRequirement(skill_name=enum_to_display(m.group(1)), level=_int(m.group(2)))
        for m in SKILL_REQUIREMENT_RE.finditer(body)
    ]
    quests: List[str] = []
    for m in QUEST_REQUIREMENT_RE.finditer(body):
        name = enum_to_display(m.group(1))
        if name not in quests:
            quests.append(name)
    qp = QUEST_POINT_REQUIREMENT_RE.search(body)
    return skills, quests, _int(qp.group(1)) if qp else None


def extract_item_requirement_names(source: str) -> List[str]:
    """
    Variable names listed by getItemRequirements(), either inside
    List.of(...)/Arrays.asList(...) or passed to repeated .add(...) calls.
    """
    body = member_body(source, "getItemRequirements")
    found: List[Tuple[int, str]] = []
    for m in LIST_LITERAL_RE.finditer(body):
        args = read_call_arguments(body, m.end() - 1)
        found.extend((m.start(), name) for name in identifier_tokens(args))
    for m in ADD_CALL_RE.finditer(body):
        found.append((m.start(), m.group(1)))
    found.sort(key=lambda pair: pair[0])
    return [name for _pos, name in found]


def extract_steps(source: str) -> Dict[str, StepRecord]:
    """
    Step variables assigned in setupSteps() with a WorldPoint and a
    description. Keyed by variable name, first binding wins.
    """
    body = member_body(source, "setupSteps")
    steps: Dict[str, StepRecord] = {}
    for m in STEP_ASSIGN_RE.finditer(body):
        var = m.group(1)
        if var in steps:
            continue
        point = WorldPoint(_int(m.group(2)), _int(m.group(3)), _int(m.group(4)))
        steps[var] = StepRecord(var, read_string(body, m.end() - 1), point)
    return steps


def _panel_from_arguments(args: List[str]) -> Optional[PanelGrouping]:
    if len(args) < 2 or not args[0].startswith('"'):
        return None
    list_match = PANEL_LIST_RE.match(args[1])
    if not list_match:
        return None
    title = read_string(args[0], 0)
    refs = identifier_tokens(read_call_arguments(args[1], list_match.end() - 1))
    return PanelGrouping(title=title, step_references=refs)


def extract_panels(source: str) -> List[PanelGrouping]:
    """PanelDetails("title", List.of(...)) groupings from getPanels(), in source order."""
    body = member_body(source, "getPanels")
    panels: List[PanelGrouping] = []
    for m in PANEL_DETAILS_RE.finditer(body):
        panel = _panel_from_arguments(read_call_arguments(body, m.end() - 1))
        if panel is not None:
            panels.append(panel)
    return panels

