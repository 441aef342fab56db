import dataclasses

import pytest

from milvus_entity.states import (
    CompactionPlan,
    CompactionPlanType,
    CompactionState,
    LoadState,
    PrivilegeObjectType,
    Role,
    User,
)


def test_pinned_values():
    assert LoadState(3) is LoadState.LOADED
    assert CompactionState(2) is CompactionState.COMPLETED
    assert CompactionPlanType(2) is CompactionPlanType.MERGE_SEGMENTS
    assert CompactionPlanType(1) is CompactionPlanType.APPLY_DELETE


@pytest.mark.parametrize("enum_cls", [LoadState, CompactionState, CompactionPlanType, PrivilegeObjectType])
def test_enum_round_trip(enum_cls):
    for member in enum_cls:
        assert enum_cls(int(member)) is member


def test_load_state_order():
    states = [LoadState(value) for value in (3, 0, 2, 1)]
    assert sorted(states) == [
        LoadState.NOT_EXIST,
        LoadState.NOT_LOAD,
        LoadState.LOADING,
        LoadState.LOADED,
    ]


def test_compaction_zero_values_are_undefined():
    assert CompactionState(0) is CompactionState.UNDEFINED
    assert CompactionPlanType(0) is CompactionPlanType.UNDEFINED


def test_unknown_state_rejected():
    with pytest.raises(ValueError):
        LoadState(42)


def test_user_and_role_are_value_objects():
    assert User("alice") == User("alice")
    assert len({Role("admin"), Role("admin"), Role("viewer")}) == 2
    with pytest.raises(dataclasses.FrozenInstanceError):
        User("alice").name = "bob"


def test_compaction_plan_defaults_and_independence():
    a = CompactionPlan()
    b = CompactionPlan()
    a.source.append(7)
    assert b.source == []
    assert a.plan_type is CompactionPlanType.UNDEFINED
    plan = CompactionPlan(source=[1, 2], target=3, plan_type=CompactionPlanType.MERGE_SEGMENTS)
    assert plan == CompactionPlan([1, 2], 3, CompactionPlanType.MERGE_SEGMENTS)