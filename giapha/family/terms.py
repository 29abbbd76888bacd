"""Vietnamese kinship terms: structured tags, label tables and the blood rule table.

A term is never matched by its display string. Each `KinshipTerm` carries
the tags it was built from (role, gender, depth, side, seniority, title),
so the in-law adapter and any other consumer can work on the tags and only
the label functions below know the Vietnamese wording.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from giapha.family.graph import FEMALE, MALE, Person

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class Role(str, Enum):
    SPOUSE = "spouse"
    ANCESTOR = "ancestor"
    DESCENDANT = "descendant"
    SIBLING = "sibling"
    PARENT_SIBLING = "parent_sibling"  # Chú / Bác / Cô / Dì / Cậu
    NIBLING = "nibling"  # the junior side of PARENT_SIBLING
    COUSIN = "cousin"
    ELDER_RELATIVE = "elder_relative"  # Ông họ / Bà họ
    RELATIVE = "relative"
    STRANGER = "stranger"


class Side(str, Enum):
    PATERNAL = "nội"
    MATERNAL = "ngoại"


class Title(str, Enum):
    """Parent-sibling titles. The value is the display word."""
    CHU = "Chú"  # father's younger brother
    BAC = "Bác"  # father's elder brother
    CO = "Cô"  # father's sister
    DI = "Dì"  # mother's sister
    CAU = "Cậu"  # mother's brother


@dataclass(frozen=True)
class KinshipTerm:
    role: Role
    label: str
    gender: str | None = None  # gender of the person being addressed
    depth: int = 0
    side: Side | None = None
    senior: bool | None = None
    title: Title | None = None
    extended: bool = False  # "họ" (collateral beyond first cousin)
    in_law: bool = False

    def __str__(self) -> str:
        return self.label


# ---------------------------------------------------------------------------
# Label tables
# ---------------------------------------------------------------------------

ANCESTOR_TITLES = ("", "Cha/Mẹ", "Ông/Bà", "Cụ", "Kỵ", "Sơ", "Tiệm", "Tiểu", "Di", "Diễn")
DESCENDANT_TITLES = ("", "Con", "Cháu", "Chắt", "Chít", "Chút", "Chét", "Chót", "Chẹt")

DESC_DIRECT = "Quan hệ Trực hệ"
DESC_SIBLINGS = "Anh chị em ruột"
DESC_RELATIVE = "Quan hệ họ hàng"
DESC_MARRIAGE = "Quan hệ Hôn nhân"
DESC_STRANGER = "Không tìm thấy quan hệ trong phạm vi dữ liệu"

SENIOR = "senior"
JUNIOR = "junior"
EQUAL = "equal"


def ancestor_title(depth: int) -> str:
    if depth < len(ANCESTOR_TITLES):
        return ANCESTOR_TITLES[depth]
    return f"Tổ đời {depth}"


def descendant_title(depth: int) -> str:
    if depth < len(DESCENDANT_TITLES):
        return DESCENDANT_TITLES[depth]
    return f"Cháu đời {depth}"


def gender_suffix(gender: str | None) -> str:
    if gender == MALE:
        return " trai"
    if gender == FEMALE:
        return " gái"
    return ""


def ancestor_label(depth: int, gender: str | None, side: Side | None) -> str:
    female = gender == FEMALE
    if depth == 1:
        return "Mẹ" if female else "Cha"
    suffix = (side or Side.PATERNAL).value
    if depth == 2:
        return f"{'Bà' if female else 'Ông'} {suffix}"
    if depth == 3:
        return f"{'Cụ bà' if female else 'Cụ ông'} {suffix}"
    return ancestor_title(depth)


def generation_prefix(depth: int, gender: str | None) -> str:
    """Prefix for a parent-sibling addressed from `depth` generations below the common ancestor."""
    female = gender == FEMALE
    if depth <= 2:
        return ""
    if depth == 3:
        return "Bà " if female else "Ông "
    if depth == 4:
        return "Cụ bà " if female else "Cụ ông "
    return f"{ancestor_title(depth - 1)} "


def sibling_label(senior: bool, gender: str | None, extended: bool = False) -> str:
    female = gender == FEMALE
    if extended:
        if not senior:
            return "Em họ"
        return "Chị họ" if female else "Anh họ"
    if senior:
        return "Chị gái" if female else "Anh trai"
    return "Em gái" if female else "Em trai"


# ---------------------------------------------------------------------------
# Term constructors
# ---------------------------------------------------------------------------

def ancestor(depth: int, gender: str | None, side: Side) -> KinshipTerm:
    return KinshipTerm(Role.ANCESTOR, ancestor_label(depth, gender, side), gender, depth, side)


def descendant(depth: int, gender: str | None) -> KinshipTerm:
    label = descendant_title(depth) + gender_suffix(gender)
    return KinshipTerm(Role.DESCENDANT, label, gender, depth)


def sibling(senior: bool, gender: str | None) -> KinshipTerm:
    return KinshipTerm(Role.SIBLING, sibling_label(senior, gender), gender, 1, senior=senior)


def cousin(senior: bool, gender: str | None, side: Side) -> KinshipTerm:
    return KinshipTerm(
        Role.COUSIN, sibling_label(senior, gender, extended=True), gender,
        side=side, senior=senior, extended=True,
    )


def parent_sibling(
    title: Title, gender: str | None, side: Side, depth: int = 2, extended: bool = False,
) -> KinshipTerm:
    label = generation_prefix(depth, gender) + title.value
    if extended:
        label += " họ"
    return KinshipTerm(
        Role.PARENT_SIBLING, label, gender, depth, side, title=title, extended=extended,
    )


def nibling(depth: int, gender: str | None, extended: bool = False) -> KinshipTerm:
    if extended:
        label = "Cháu họ"
    else:
        label = descendant_title(depth) + gender_suffix(gender)
    return KinshipTerm(Role.NIBLING, label, gender, depth, extended=extended)


def elder_relative(gender: str | None, side: Side) -> KinshipTerm:
    label = "Bà họ" if gender == FEMALE else "Ông họ"
    return KinshipTerm(Role.ELDER_RELATIVE, label, gender, side=side, extended=True)


def spouse(gender: str | None) -> KinshipTerm:
    return KinshipTerm(Role.SPOUSE, "Vợ" if gender == FEMALE else "Chồng", gender)


def relative() -> KinshipTerm:
    return KinshipTerm(Role.RELATIVE, "Họ hàng")


def stranger() -> KinshipTerm:
    return KinshipTerm(Role.STRANGER, "Người dưng")


# ---------------------------------------------------------------------------
# Seniority
# ---------------------------------------------------------------------------

def compare_seniority(a: Person, b: Person) -> str:
    """Birth order first, then birth year. Unknown on either side is not a decision."""
    if a.id == b.id:
        return EQUAL
    if a.birth_order is not None and b.birth_order is not None:
        if a.birth_order != b.birth_order:
            return SENIOR if a.birth_order < b.birth_order else JUNIOR
    if a.birth_year is not None and b.birth_year is not None:
        if a.birth_year != b.birth_year:
            return SENIOR if a.birth_year < b.birth_year else JUNIOR
    return EQUAL


def outranks(*pairs: tuple[Person, Person]) -> bool:
    """True if the first of the leading pair is senior.

    Each pair is consulted in turn until one decides; a full tie falls back to
    comparing IDs of the leading pair so that swapping the arguments always
    flips the answer.
    """
    for x, y in pairs:
        result = compare_seniority(x, y)
        if result != EQUAL:
            return result == SENIOR
    a, b = pairs[0]
    return a.id < b.id


# ---------------------------------------------------------------------------
# Blood rule table
# ---------------------------------------------------------------------------

def side_of(branch: Person) -> Side:
    return Side.PATERNAL if branch.gender == MALE else Side.MATERNAL


def _parent_sibling_title(side: Side, branch_a: Person, person_b: Person, branch_b: Person) -> Title:
    if side is Side.MATERNAL:
        return Title.DI if person_b.gender == FEMALE else Title.CAU
    if person_b.gender == FEMALE:
        return Title.CO
    # the elder brother of A's line is Bác, the younger Chú
    if compare_seniority(branch_a, branch_b) == SENIOR:
        return Title.CHU
    return Title.BAC


def resolve_blood_terms(
    depth_a: int,
    depth_b: int,
    person_a: Person,
    person_b: Person,
    path_a: tuple[Person, ...],
    path_b: tuple[Person, ...],
) -> tuple[KinshipTerm, KinshipTerm, str]:
    """Return (A's term for B, B's term for A, description).

    `path_x` runs from person X up to, but excluding, the common ancestor, so
    `path_x[-1]` is the branch point: the ancestor's child on X's side.
    Cases where A is the senior generation are answered by resolving the
    swapped pair and swapping the result back.
    """
    if depth_a < depth_b:
        b_term, a_term, description = resolve_blood_terms(
            depth_b, depth_a, person_b, person_a, path_b, path_a,
        )
        return a_term, b_term, description

    if not path_a:
        return relative(), relative(), DESC_RELATIVE
    branch_a = path_a[-1]
    side = side_of(branch_a)

    # B is A's direct ancestor
    if depth_b == 0:
        return (
            ancestor(depth_a, person_b.gender, side),
            descendant(depth_a, person_a.gender),
            DESC_DIRECT,
        )

    if not path_b:
        return relative(), relative(), DESC_RELATIVE
    branch_b = path_b[-1]

    if depth_a == depth_b == 1:
        a_senior = outranks((person_a, person_b))
        return sibling(not a_senior, person_b.gender), sibling(a_senior, person_a.gender), DESC_SIBLINGS

    if depth_a == depth_b:
        a_senior = outranks((branch_a, branch_b), (person_a, person_b))
        return (
            cousin(not a_senior, person_b.gender, side),
            cousin(a_senior, person_a.gender, side),
            f"Anh em họ {side.value.capitalize()}",
        )

    if depth_b == 1:
        # B is a sibling of A's ancestor at depth_a - 1
        title = _parent_sibling_title(side, branch_a, person_b, branch_b)
        return (
            parent_sibling(title, person_b.gender, side, depth=depth_a),
            nibling(depth_a, person_a.gender),
            f"Bên {side.value.capitalize()} (Vế trên)",
        )

    description = f"Họ hàng {side.value.capitalize()}"
    if depth_a - depth_b == 1:
        title = _parent_sibling_title(side, branch_a, person_b, branch_b)
        b_elder = parent_sibling(title, person_b.gender, side, extended=True)
    else:
        b_elder = elder_relative(person_b.gender, side)
    return b_elder, nibling(depth_a, person_a.gender, extended=True), description
