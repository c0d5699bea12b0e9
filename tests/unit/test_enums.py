"""Tests for linear_toon/enums.py."""

from linear_toon.enums import RELATION_ORDER, RelationKind, ResolutionKind
from linear_toon.orchestration.plan import LinkAttach, MutationPlan, PrimaryWrite, RelationCreate


class TestResolutionKind:
    def test_scoped_kinds(self):
        scoped = {kind for kind in ResolutionKind if kind.is_scoped}

        assert scoped == {ResolutionKind.STATE, ResolutionKind.CYCLE, ResolutionKind.MILESTONE}

    def test_str_is_value(self):
        assert str(ResolutionKind.TEAM) == "team"


class TestRelationKind:
    def test_wire_values(self):
        assert [kind.value for kind in RELATION_ORDER] == ["isBlockedBy", "blocks", "related", "duplicate"]

    def test_request_attributes(self):
        assert [kind.request_attr for kind in RelationKind] == ["blocked_by", "blocks", "related_to", "duplicate_of"]


class TestMutationPlan:
    def test_side_effects_run_relations_before_links(self):
        relation = RelationCreate(RelationKind.BLOCKS, "LIN-2")
        link = LinkAttach("https://x.test", "x")
        plan = MutationPlan(PrimaryWrite("create", {"title": "t"}), relations=[relation], links=[link])

        assert list(plan.side_effects()) == [relation, link]
        assert len(plan) == 3
