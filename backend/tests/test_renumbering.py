"""Tests for gap-free renumbering after structural changes."""

from __future__ import annotations

from zonemap.core import PolygonType, renumber
from tests.conftest import AREA_1, AREA_2, AREA_3, square

AREA = PolygonType.AREA
MZ = PolygonType.MONITORING_ZONE
SP = PolygonType.SAMPLE_PLOT


def _names(store):
    return [e.name for e in store.entities()]


def _build_two_areas(store):
    a1 = store.add_polygon(AREA, None, AREA_1)
    a2 = store.add_polygon(AREA, None, AREA_2)
    z11 = store.add_polygon(MZ, a1.id, square(10, 10, 30))
    z12 = store.add_polygon(MZ, a1.id, square(50, 10, 30))
    z13 = store.add_polygon(MZ, a1.id, square(10, 50, 30))
    store.add_polygon(SP, z12.id, square(55, 15, 5))
    store.add_polygon(SP, z12.id, square(65, 15, 5))
    store.add_polygon(SP, z13.id, square(15, 55, 5))
    z21 = store.add_polygon(MZ, a2.id, square(210, 10, 30))
    store.add_polygon(SP, z21.id, square(215, 15, 5))
    return a1, a2, z11, z12, z13


def test_consistent_store_is_untouched(store):
    _build_two_areas(store)
    before = store.snapshot()
    assert renumber(store) == {}
    assert store.snapshot() == before


def test_delete_first_zone_shifts_siblings_and_their_plots(store):
    _, _, z11, z12, z13 = _build_two_areas(store)
    result = store.remove_polygon(z11.id)
    assert store.get(z12.id).name == "PA1_MZ1"
    assert store.get(z13.id).name == "PA1_MZ2"
    assert [p.name for p in store.children_of(z12.id)] == ["PA1_MZ1_SP1", "PA1_MZ1_SP2"]
    assert [p.name for p in store.children_of(z13.id)] == ["PA1_MZ2_SP1"]
    assert result.renamed[z12.id] == ("PA1_MZ2", "PA1_MZ1")


def test_delete_area_renumbers_whole_subtree(store):
    a1, a2, *_ = _build_two_areas(store)
    store.remove_polygon(a1.id)
    assert _names(store) == ["PA1", "PA1_MZ1", "PA1_MZ1_SP1"]
    assert store.get(a2.id).name == "PA1"


def test_renumber_is_idempotent(store):
    _, _, z11, _, _ = _build_two_areas(store)
    store.remove_polygon(z11.id)
    once = store.snapshot()
    assert renumber(store) == {}
    assert store.snapshot() == once


def test_renumber_repairs_stale_names(store):
    _, a2, _, z12, _ = _build_two_areas(store)
    a2.name = "PA9"
    store.children_of(z12.id)[1].name = "bogus"
    changed = renumber(store)
    assert a2.id in changed
    assert a2.name == "PA2"
    # plots under an Area whose number moved follow it
    assert [e.name for e in store.by_type(SP)][-1] == "PA2_MZ1_SP1"
    assert store.children_of(z12.id)[1].name == "PA1_MZ2_SP2"
    assert renumber(store) == {}


def test_relative_order_preserved(store):
    a1 = store.add_polygon(AREA, None, AREA_1)
    a2 = store.add_polygon(AREA, None, AREA_2)
    a3 = store.add_polygon(AREA, None, AREA_3)
    store.remove_polygon(a1.id)
    assert [(e.id, e.name) for e in store.by_type(AREA)] == [(a2.id, "PA1"), (a3.id, "PA2")]
