from __future__ import annotations

from datetime import datetime, timedelta

from elastic_handler.aliases import IndexCatalog
from elastic_handler.retirement import (
    RetirementPlan,
    plan_alias_removal,
    plan_index_deletion,
    remove_older_than,
)


def test_plan_alias_removal_pairs_every_index(listing):
    catalog = IndexCatalog.from_raw_listing(listing).matching("logs-%y-%m-%d")

    plan = plan_alias_removal(catalog, "logs")

    assert plan.removals == (("logs-16-04-01", "logs"), ("logs-16-04-02", "logs"))
    assert plan.to_body() == {
        "actions": [
            {"remove": {"index": "logs-16-04-01", "alias": "logs"}},
            {"remove": {"index": "logs-16-04-02", "alias": "logs"}},
        ]
    }


def test_plan_alias_removal_empty_catalog_is_nothing_to_do():
    assert plan_alias_removal(IndexCatalog(), "logs") is None


def test_zero_pair_plan_serializes_to_no_action():
    plan = RetirementPlan()

    assert not plan
    assert len(plan) == 0
    assert plan.to_body() is None
    assert plan.to_json() is None


def test_plan_index_deletion_sorted(listing):
    catalog = IndexCatalog.from_raw_listing(listing).matching("checks-%y-%m-%d")

    names = plan_index_deletion(catalog)

    assert names == [f"checks-16-04-0{day}" for day in range(1, 10)]
    assert plan_index_deletion(IndexCatalog()) == []


def test_remove_older_than_body(listing):
    catalog = IndexCatalog.from_raw_listing(listing)
    now = datetime(2016, 4, 9) + timedelta(minutes=1)

    out = remove_older_than(catalog, "checks-%y-%m-%d", "checks", 7, now)

    assert out == (
        b'{"actions":[{"remove":{"index":"checks-16-04-01","alias":"checks"}},'
        b'{"remove":{"index":"checks-16-04-02","alias":"checks"}}]}'
    )


def test_remove_older_than_nothing_old(listing):
    catalog = IndexCatalog.from_raw_listing(listing)

    assert remove_older_than(catalog, "checks-%y-%m-%d", "checks", 30, datetime(2016, 4, 9)) is None
