"""
Name conversions between quest display names, Java class names and output slugs.
"""

import re

ROMAN_NUMERAL_RE = re.compile(r"^(?=[IVX])X{0,3}(?:IX|IV|V?I{0,3})$")


def display_name_to_class_name(name: str) -> str:
    """'Waterfall Quest' -> WaterfallQuest, "Cook's Assistant" -> CooksAssistant."""
    words = name.replace("'", "").split()
    return "".join(word[:1].upper() + word[1:].lower() for word in words)


def class_name_to_folder(class_name: str) -> str:
    """WaterfallQuest -> waterfallquest (Quest Helper folder and output slug)."""
    return class_name.lower()


def class_name_to_display_name(class_name: str) -> str:
    """WaterfallQuest -> 'Waterfall Quest', MonkeyMadnessII -> 'Monkey Madness II'."""
    spaced = re.sub(r"([a-z])([A-Z])", r"\1 \2", class_name)
    spaced = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", spaced)
    return spaced.strip()


def _display_word(part: str) -> str:
    # Roman numerals stay upper case: MONKEY_MADNESS_II -> Monkey Madness II
    if ROMAN_NUMERAL_RE.match(part):
        return part
    return part.capitalize()


def enum_to_display(constant: str) -> str:
    """COOKING -> Cooking, DRAGON_SLAYER_II -> Dragon Slayer II."""
    return " ".join(_display_word(part) for part in constant.split("_") if part)
