"""Tests for compute_kinship: marriage, blood, in-law and stranger results."""

import itertools

import pytest

from family_fixtures import Family, adopted, child, marriage, person


def _family_with_cousins(family):
    """Adds uncle's son, a grandson through son, and a great-grandson."""
    return family.with_(
        [
            person("cousin", "Anh Họ", "male", birth_year=1980),
            person("grandson", "Cháu Nội", "male"),
            person("great-grandson", "Chắt", "male"),
        ],
        [
            child("uncle", "cousin"),
            child("son", "grandson"),
            child("grandson", "great-grandson"),
        ],
    )


class TestSelfAndMarriage:

    def test_same_person_is_none(self, family):
        assert family.kin("father", "father") is None

    def test_husband_and_wife(self, family):
        result = family.kin("father", "mother")
        assert result.a_calls_b == "Vợ"
        assert result.b_calls_a == "Chồng"
        assert result.distance == 0
        assert result.path_labels == ["Cha và Mẹ là vợ chồng."]

    def test_wife_and_husband(self, family):
        result = family.kin("mother", "father")
        assert (result.a_calls_b, result.b_calls_a) == ("Chồng", "Vợ")

    def test_marriage_wins_over_blood(self, family):
        fam = _family_with_cousins(family).with_(
            [person("cousin-f", "Em Họ", "female")],
            [child("uncle", "cousin-f"), marriage("son", "cousin-f")],
        )
        result = fam.kin("son", "cousin-f")
        assert result.a_calls_b == "Vợ"
        assert result.distance == 0


class TestDirectLineage:

    @pytest.mark.parametrize("a,b,expected", [
        ("son", "father", "Cha"),
        ("daughter", "mother", "Mẹ"),
        ("father", "son", "Con trai"),
        ("father", "daughter", "Con gái"),
        ("son", "grandpa", "Ông nội"),
        ("son", "grandma", "Bà nội"),
        ("grandpa", "son", "Cháu trai"),
        ("son", "mat-grandpa", "Ông ngoại"),
        ("daughter", "mat-grandma", "Bà ngoại"),
    ])
    def test_terms(self, family, a, b, expected):
        assert family.kin(a, b).a_calls_b == expected

    def test_description_and_path(self, family):
        result = family.kin("son", "grandpa")
        assert result.description == "Quan hệ Trực hệ (Tổ tiên chung: Ông)"
        assert result.distance == 2
        assert result.path_labels == ["Con Trai cách Ông 2 đời.", "Ông cách Ông 0 đời."]

    def test_great_grandfather(self, family):
        fam = _family_with_cousins(family)
        result = fam.kin("grandson", "grandpa")
        assert result.a_calls_b == "Cụ ông nội"
        assert result.b_calls_a == "Chắt trai"


class TestCollateral:

    def test_siblings_by_birth_order(self, family):
        result = family.kin("son", "daughter")
        assert (result.a_calls_b, result.b_calls_a) == ("Em gái", "Anh trai")
        assert result.description.startswith("Anh chị em ruột")

    def test_younger_sister_calls_elder_brother(self, family):
        result = family.kin("daughter", "son")
        assert (result.a_calls_b, result.b_calls_a) == ("Anh trai", "Em gái")

    @pytest.mark.parametrize("b,expected", [
        ("aunt", "Cô"),
        ("uncle", "Chú"),
        ("mat-uncle", "Cậu"),
    ])
    def test_parents_siblings(self, family, b, expected):
        assert family.kin("son", b).a_calls_b == expected

    def test_uncle_calls_nephew(self, family):
        assert family.kin("uncle", "son").a_calls_b == "Cháu trai"

    def test_fathers_elder_brother_is_bac(self, family):
        fam = _family_with_cousins(family)
        assert fam.kin("cousin", "father").a_calls_b == "Bác"
        assert fam.kin("cousin", "aunt").a_calls_b == "Cô"

    def test_mothers_sister_is_di(self, family):
        fam = family.with_([person("mat-aunt", "Dì", "female")], [child("mat-grandpa", "mat-aunt")])
        result = fam.kin("daughter", "mat-aunt")
        assert result.a_calls_b == "Dì"
        assert result.description.startswith("Bên Ngoại (Vế trên)")

    def test_cousins_rank_by_branch(self, family):
        # cousin is older by birth year, but father outranks uncle
        fam = _family_with_cousins(family)
        result = fam.kin("son", "cousin")
        assert (result.a_calls_b, result.b_calls_a) == ("Em họ", "Anh họ")
        assert result.description == "Anh em họ Nội (Tổ tiên chung: Ông)"

    def test_great_uncle(self, family):
        fam = _family_with_cousins(family)
        assert fam.kin("grandson", "uncle").a_calls_b == "Ông Chú"
        assert fam.kin("grandson", "aunt").a_calls_b == "Bà Cô"

    def test_extended_one_generation(self, family):
        fam = _family_with_cousins(family)
        result = fam.kin("grandson", "cousin")
        assert (result.a_calls_b, result.b_calls_a) == ("Chú họ", "Cháu họ")

    def test_extended_two_generations(self, family):
        fam = _family_with_cousins(family)
        result = fam.kin("great-grandson", "cousin")
        assert (result.a_calls_b, result.b_calls_a) == ("Ông họ", "Cháu họ")

    def test_adoption_counts_as_descent(self, family):
        fam = family.with_([person("adoptee", "Con Nuôi", "female")], [adopted("aunt", "adoptee")])
        assert fam.kin("adoptee", "grandpa").a_calls_b == "Ông ngoại"
        assert fam.kin("aunt", "adoptee").a_calls_b == "Con gái"


class TestInLaws:

    def test_daughter_in_law(self, family):
        fam = family.with_([person("wife", "Vợ", "female", is_in_law=True)], [marriage("son", "wife")])
        result = fam.kin("father", "wife")
        assert result.a_calls_b == "Con dâu"
        assert result.b_calls_a == "Cha"
        assert result.description == "Thông qua hôn nhân của Con Trai"
        assert result.path_labels[-1] == "Vợ là vợ/chồng của Con Trai"

    def test_in_law_on_the_a_side(self, family):
        fam = family.with_([person("wife", "Vợ", "female", is_in_law=True)], [marriage("son", "wife")])
        result = fam.kin("wife", "father")
        assert (result.a_calls_b, result.b_calls_a) == ("Cha", "Con dâu")
        assert result.path_labels[0] == "Vợ là vợ/chồng của Con Trai"
        assert result.distance == 1

    def test_son_in_law(self, family):
        fam = family.with_([person("husband", "Chồng", "male")], [marriage("daughter", "husband")])
        assert fam.kin("mother", "husband").a_calls_b == "Con rể"
        assert fam.kin("son", "husband").a_calls_b == "Em rể"

    def test_elder_brothers_wife(self, family):
        fam = family.with_([person("wife", "Vợ", "female")], [marriage("son", "wife")])
        assert fam.kin("daughter", "wife").a_calls_b == "Chị dâu"

    @pytest.mark.parametrize("blood,spouse_gender,expected", [
        ("uncle", "female", "Thím"),
        ("mat-uncle", "female", "Mợ"),
        ("aunt", "male", "Dượng"),
    ])
    def test_parents_siblings_spouses(self, family, blood, spouse_gender, expected):
        fam = family.with_([person("spouse", "Dâu Rể", spouse_gender)], [marriage(blood, "spouse")])
        result = fam.kin("son", "spouse")
        assert result.a_calls_b == expected
        assert fam.kin("spouse", "son").b_calls_a == expected

    def test_step_grandmother(self, family):
        fam = family.with_([person("step", "Bà Kế", "female", is_in_law=True)], [marriage("grandpa", "step")])
        assert fam.kin("son", "step").a_calls_b == "Bà nội"

    def test_grandson_in_law(self, family):
        fam = family.with_([person("wife", "Vợ", "female")], [marriage("son", "wife")])
        assert fam.kin("grandpa", "wife").a_calls_b == "Cháu dâu"


class TestNoRelation:

    def test_stranger(self, family):
        fam = family.with_([person("stranger", "Người Lạ")])
        result = fam.kin("son", "stranger")
        assert (result.a_calls_b, result.b_calls_a) == ("Người dưng", "Người dưng")
        assert result.distance == -1
        assert result.path_labels == []
        assert not result.related

    def test_to_dict_shape(self, family):
        fam = family.with_([person("stranger", "Người Lạ")])
        assert fam.kin("stranger", "son").to_dict() == {
            "aCallsB": "Người dưng",
            "bCallsA": "Người dưng",
            "description": "Không tìm thấy quan hệ trong phạm vi dữ liệu",
            "distance": -1,
            "pathLabels": [],
        }

    def test_dangling_ids_degrade_quietly(self, family):
        fam = family.with_(relationships=[child("ghost", "son"), marriage("son", "phantom")])
        assert fam.kin("son", "father").a_calls_b == "Cha"
        fam = fam.with_([person("stranger")])
        assert fam.kin("son", "stranger").distance == -1


class TestSymmetry:

    def test_swapping_roles_mirrors_terms(self, family):
        fam = _family_with_cousins(family).with_(
            [
                person("wife", "Vợ", "female", is_in_law=True),
                person("thim", "Thím", "female", is_in_law=True),
            ],
            [marriage("son", "wife"), marriage("uncle", "thim")],
        )
        for a, b in itertools.combinations(fam.people, 2):
            forward = fam.kin(a, b)
            backward = fam.kin(b, a)
            assert forward.a_calls_b == backward.b_calls_a, (a, b)
            assert forward.b_calls_a == backward.a_calls_b, (a, b)
            assert forward.distance == backward.distance, (a, b)

    def test_double_marriage_links_through_each_persons_own_spouse(self):
        # two families exchange a brother and a sister: a marries s, b marries t
        fam = Family(
            [
                person("px", "Cha X"), person("py", "Cha Y"),
                person("a", "Anh X", "male", birth_order=1),
                person("t", "Em X", "female", birth_order=2),
                person("s", "Chị Y", "female", birth_order=1),
                person("b", "Em Y", "male", birth_order=2),
            ],
            [
                child("px", "a"), child("px", "t"),
                child("py", "s"), child("py", "b"),
                marriage("a", "s"), marriage("b", "t"),
            ],
        )
        forward = fam.kin("a", "b")
        backward = fam.kin("b", "a")
        assert (forward.a_calls_b, forward.b_calls_a) == ("Em trai", "Anh rể")
        assert forward.description == "Thông qua hôn nhân của Chị Y"
        assert (backward.a_calls_b, backward.b_calls_a) == ("Anh trai", "Em rể")
        assert backward.description == "Thông qua hôn nhân của Em X"
