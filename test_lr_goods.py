#!/usr/bin/env python3
"""
Test LR Goods Table Builder
Structured goods_items vs legacy comma lists, padding and silent truncation
"""

import os
import sys
import json

# Add the project root to sys.path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.schemas.lr import BookingRecord
from app.services.lr_goods import DEFAULT_ROW_CAPACITY, CargoRow, build_cargo_rows, fit_cargo_rows


def test_legacy_lists_zip_with_unequal_lengths():
    booking = BookingRecord(cargo_units="2 BOX, 3 CARTOON", material_description="Rice")
    rows = build_cargo_rows(booking)
    assert rows == [
        CargoRow(quantity="2 BOX", description="Rice"),
        CargoRow(quantity="3 CARTOON", description=""),
    ]


def test_structured_items_win_over_legacy_lists():
    booking = BookingRecord(
        goods_items=[
            {"description": "Rice Bags", "quantity": "10 BOX", "weight": "500", "value": 25000},
            {"description": "Water Bottle", "quantity": "5 CARTON"},
        ],
        cargo_units="1 DRUM, 2 DRUM, 3 DRUM",
        material_description="Oil, Grease, Paint",
    )
    rows = build_cargo_rows(booking)
    assert len(rows) == 2
    assert rows[0] == CargoRow(quantity="10 BOX", description="Rice Bags", weight="500", value="25000")
    assert rows[1].description == "Water Bottle"
    assert all("DRUM" not in row.quantity for row in rows)


def test_empty_goods_items_fall_back_to_legacy_lists():
    booking = BookingRecord(goods_items=[], cargo_units="4 BAGS", material_description="Cement")
    assert build_cargo_rows(booking) == [CargoRow(quantity="4 BAGS", description="Cement")]


def test_goods_items_as_json_string():
    items = [{"description": "Tiles", "quantity": "40 BOX"}]
    single = BookingRecord(goods_items=json.dumps(items))
    double = BookingRecord(goods_items=json.dumps(json.dumps(items)))
    broken = BookingRecord(goods_items="[{not json", cargo_units="1 BOX")

    assert build_cargo_rows(single) == [CargoRow(quantity="40 BOX", description="Tiles")]
    assert build_cargo_rows(double) == build_cargo_rows(single)
    assert build_cargo_rows(broken) == [CargoRow(quantity="1 BOX")]


def test_no_cargo_gives_no_rows():
    assert build_cargo_rows(BookingRecord()) == []


def test_fit_pads_with_blank_rows():
    rows = fit_cargo_rows([CargoRow(quantity="1 BOX", description="Fan")])
    assert len(rows) == DEFAULT_ROW_CAPACITY
    assert not rows[0].is_empty
    assert all(row.is_empty for row in rows[1:])
    # blank, never a placeholder dash
    assert all(row.quantity == "" and row.description == "" for row in rows[1:])


def test_fit_drops_rows_beyond_capacity():
    rows = [CargoRow(quantity=f"{i} BOX", description=f"Item {i}") for i in range(1, 8)]
    fitted = fit_cargo_rows(rows)
    assert len(fitted) == 5
    assert [row.description for row in fitted] == ["Item 1", "Item 2", "Item 3", "Item 4", "Item 5"]
    # the input list is left alone
    assert len(rows) == 7
