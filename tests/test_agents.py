"""Tests for agent kinds, perception zones and flags."""

import pytest

from tortuga.agents import (
    EXTENDED_OFFSETS,
    ORTHOGONAL_OFFSETS,
    PLACEMENT_ORDER,
    SELF_OFFSETS,
    SURROUNDING_OFFSETS,
    Agent,
    AgentKind,
    perception_offsets,
)


def test_placement_order_matches_input_format():
    assert "".join(kind.value for kind in PLACEMENT_ORDER) == "JDKRCT"


def test_perception_zones():
    assert perception_offsets(AgentKind.PLAYER, 1) == SURROUNDING_OFFSETS
    assert perception_offsets(AgentKind.PLAYER, 2) == EXTENDED_OFFSETS
    assert len(EXTENDED_OFFSETS) == 12
    assert perception_offsets(AgentKind.KRAKEN) == ORTHOGONAL_OFFSETS
    assert perception_offsets(AgentKind.DAVY_JONES) == SURROUNDING_OFFSETS
    for kind in (AgentKind.ROCK, AgentKind.CHEST, AgentKind.TORTUGA):
        assert perception_offsets(kind) == SELF_OFFSETS


def test_hazards_do_not_depend_on_scenario():
    assert perception_offsets(AgentKind.KRAKEN, 2) == ORTHOGONAL_OFFSETS
    assert perception_offsets(AgentKind.DAVY_JONES, 2) == SURROUNDING_OFFSETS


def test_player_rejects_unknown_scenario():
    with pytest.raises(ValueError):
        perception_offsets(AgentKind.PLAYER, 3)


def test_agent_flags():
    assert Agent.spawn(AgentKind.KRAKEN, (3, 3)).is_hazardous
    assert Agent.spawn(AgentKind.DAVY_JONES, (3, 3)).is_hazardous
    rock = Agent.spawn(AgentKind.ROCK, (3, 3))
    assert not rock.is_hazardous
    assert rock.blocks_own_cell
    assert not Agent.spawn(AgentKind.TORTUGA, (3, 3)).blocks_own_cell
    assert Agent.spawn(AgentKind.CHEST, (8, 8)).alias == "C"
