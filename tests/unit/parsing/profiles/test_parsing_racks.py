from __future__ import annotations

from warehouse_import.parsing.adapter import map_row
from warehouse_import.parsing.profiles.racks import RACK_HEADER_MAP, RackRow, rack_schema
from warehouse_import.parsing.types import Invalid, Valid


def _parse(raw: dict[str, str]):
    return rack_schema.validate(map_row(raw, header_map=RACK_HEADER_MAP))


def test_rack_happy_path() -> None:
    """Good cells parse into a rack row successfully."""
    raw = {
        "Symbol": "A1",
        "Name": "Cold storage",
        "Rows": "4",
        "Cols": "6",
        "Min Temp": "-5",
        "Max Temp": "5,5",
        "Max Weight Kg": "500",
        "Max Item Width": "400",
        "Max Item Height": "300",
        "Max Item Depth": "200",
        "Is Dangerous": "tak",
        "Comment": "near the dock",
    }
    res = _parse(raw)
    assert isinstance(res, Valid)
    rack: RackRow = res.value
    assert rack.symbol == "A1"
    assert rack.name == "Cold storage"
    assert (rack.rows, rack.cols) == (4, 6)
    assert rack.max_temp == 5.5
    assert rack.max_item_size.width == 400.0
    assert rack.is_dangerous is True
    assert rack.to_mapping()["maxItemSize"] == {"width": 400.0, "height": 300.0, "depth": 200.0}


def test_rack_max_weight_alias() -> None:
    """Older exports call the column `maxWeight`."""
    raw = {
        "symbol": "B1", "rows": "1", "cols": "1", "minTemp": "0", "maxTemp": "1",
        "maxWeight": "10", "maxItemWidth": "1", "maxItemHeight": "1", "maxItemDepth": "1",
    }
    res = _parse(raw)
    assert isinstance(res, Valid)
    assert res.value.max_weight_kg == 10.0


def test_rack_missing_required_symbol() -> None:
    """Blank `symbol` -> one `Required` issue on `symbol`."""
    raw = {
        "symbol": "", "rows": "3", "cols": "3", "minTemp": "0", "maxTemp": "10",
        "maxWeightKg": "100", "maxItemWidth": "100", "maxItemHeight": "100", "maxItemDepth": "100",
    }
    res = _parse(raw)
    assert isinstance(res, Invalid)
    assert [(i.path, i.message) for i in res.issues] == [("symbol", "Required")]


def test_rack_fractional_rows_rejected() -> None:
    raw = {
        "symbol": "C1", "rows": "2,5", "cols": "3", "minTemp": "0", "maxTemp": "10",
        "maxWeightKg": "100", "maxItemWidth": "100", "maxItemHeight": "100", "maxItemDepth": "100",
    }
    res = _parse(raw)
    assert isinstance(res, Invalid)
    assert [(i.path, i.message) for i in res.issues] == [("rows", "Expected integer, received float")]
