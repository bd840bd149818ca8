from unittest.mock import MagicMock
import pytest

# Mirrors the reward document authors write: weights inline on <choice>.
RANDOM_CHOICE_XML = """
<modifiers>
  <random_choice>
    <choice weight="78">
      <modifier>
        <nothing/>
        <grant_xp value="56"/>
      </modifier>
      <requirement>
        <and ok="false" reason="always fails">
          <true_requirement ok="true"/>
          <false_requirement ok="false" reason="always fails"/>
        </and>
      </requirement>
    </choice>
    <choice weight="12">
      <modifier>
        <nothing/>
      </modifier>
      <requirement>
        <and ok="false" reason="always fails">
          <true_requirement ok="true"/>
        </and>
      </requirement>
    </choice>
  </random_choice>
</modifiers>
"""

IF_THEN_ELSE_XML = """
<modifiers>
  <if_then_else>
    <if>
      <friends_requirement required="2" ok="false" reason="Insufficient friends"/>
      <true_requirement ok="true"/>
    </if>
    <then>
      <grant_stat type="attribute" ikey="_energy_max" value="0"/>
      <grant_xp value="54"/>
    </then>
    <else>
      <grant_stat_range type="currency" ikey="gamecoins" min="2" max="6"/>
      <remove_items/>
    </else>
  </if_then_else>
</modifiers>
"""

@pytest.fixture
def mock_node():
    def make(name, children=(), **attrs):
        n = MagicMock(spec=["name", "get_attribute", "children"])
        n.name = name
        n.children = list(children)
        n.get_attribute.side_effect = lambda key: attrs.get(key)
        return n
    return make

@pytest.fixture
def random_choice_xml():
    return RANDOM_CHOICE_XML

@pytest.fixture
def if_then_else_xml():
    return IF_THEN_ELSE_XML
