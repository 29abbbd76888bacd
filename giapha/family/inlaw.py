"""In-law adapter: turn a blood term for a spouse into the term for the person who married in."""

from __future__ import annotations

from dataclasses import replace

from giapha.family.graph import FEMALE, MALE, Person
from giapha.family.terms import (
    KinshipTerm,
    Role,
    Title,
    ancestor_label,
    descendant_title,
    elder_relative,
    generation_prefix,
)

# Keyed on the blood relative's title, not the in-law's gender: Chú's wife is
# Thím and Cậu's wife is Mợ, never Dượng. Cô/Dì's husband is Dượng.
_SPOUSE_OF_TITLE = {
    Title.CHU: "Thím",
    Title.CAU: "Mợ",
    Title.CO: "Dượng",
    Title.DI: "Dượng",
}


def in_law_term(blood: KinshipTerm, in_law: Person) -> KinshipTerm:
    """What a blood relative calls `in_law`, given what they call in_law's spouse.

    Terms with no in-law form (generic relatives) are returned unchanged.
    """
    gender = in_law.gender
    marker = " rể" if gender == MALE else " dâu"
    role = blood.role

    if role in (Role.DESCENDANT, Role.NIBLING):
        head = "Cháu" if blood.extended else descendant_title(blood.depth)
        label = head + marker
    elif role in (Role.SIBLING, Role.COUSIN):
        if blood.senior:
            label = "Anh rể" if gender == MALE else "Chị dâu"
        else:
            label = "Em" + marker
        if blood.extended:
            label += " họ"
    elif role is Role.PARENT_SIBLING:
        word = _SPOUSE_OF_TITLE.get(blood.title)
        if word is None:
            word = "Bác gái" if gender == FEMALE else "Bác trai"
        label = generation_prefix(blood.depth, gender) + word
        if blood.extended:
            label += " họ"
    elif role is Role.ANCESTOR:
        if blood.depth == 1:
            label = "Mẹ kế" if gender == FEMALE else "Cha dượng"
        else:
            label = ancestor_label(blood.depth, gender, blood.side)
    elif role is Role.ELDER_RELATIVE:
        label = elder_relative(gender, blood.side).label
    else:
        return blood

    return replace(blood, label=label, gender=gender, in_law=True)
