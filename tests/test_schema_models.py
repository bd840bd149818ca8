import pytest
from pydantic import TypeAdapter, ValidationError
from rewardrules.engine.modifiers import (
    Modifier, GrantXpRange, GrantStatRange, GrantItem, ChoiceEntry, RandomChoice, IfThenElse, Nothing,
)
from rewardrules.engine.requirements import FalseRequirement

def test_xp_range_rejects_inverted_bounds():
    with pytest.raises(ValidationError, match="min <= max"):
        GrantXpRange(min=10, max=1)

def test_stat_range_rejects_inverted_bounds():
    with pytest.raises(ValidationError, match="min <= max"):
        GrantStatRange(stat_type="currency", item_key="gold", min=3, max=2)

def test_choice_weight_must_be_positive():
    with pytest.raises(ValidationError):
        ChoiceEntry(weight=0)

def test_models_are_frozen():
    g = GrantItem(item_key="sword")
    with pytest.raises(ValidationError):
        g.item_key = "axe"

def test_tree_survives_json_dump():
    tree = IfThenElse(
        condition=(FalseRequirement(reason="nope"),),
        then_branch=(GrantItem(item_key="sword"),),
        else_branch=(RandomChoice(choices=(ChoiceEntry(weight=2, modifiers=(Nothing(),)),)),),
    )
    adapter = TypeAdapter(Modifier)
    assert adapter.validate_json(adapter.dump_json(tree)) == tree

def test_discriminator_picks_variant():
    m = TypeAdapter(Modifier).validate_python({"kind": "grant_xp_range", "min": 1, "max": 4})
    assert isinstance(m, GrantXpRange)
