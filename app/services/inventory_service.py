"""
Frames and Crystals page business logic.

Both inventories share the same shape: a catalogue table with a stock
badge, hard delete, and a +/- stock control.  Stock adjustments are
read-then-write single-row updates floored at zero; two concurrent
adjustments may race and the last write wins.
"""

from __future__ import annotations

import logging
from typing import Any

from app.models.crystal import Crystal
from app.models.frame import Frame
from app.schemas.common import TableParams, TableResponse
from app.schemas.inventory import (
    CrystalCreate,
    CrystalResponse,
    CrystalUpdate,
    FrameCreate,
    FrameResponse,
    FrameUpdate,
    StockFilter,
    stock_status,
)
from app.services.gateway import DataGateway
from app.services.table_service import TableSpec, render_table
from app.utils.constants import COATING_LABELS, CRYSTAL_LOW_STOCK, FRAME_LOW_STOCK
from app.utils.table_engine import ColumnDef, equals_value, text_search

logger = logging.getLogger(__name__)


def matches_stock_filter(stock: int, stock_filter: Any, low_threshold: int) -> bool:
    """Stock badge filter: ``available`` above threshold, ``low`` at or below it, ``out`` == 0."""
    if stock_filter == "available":
        return stock > low_threshold
    if stock_filter == "low":
        return stock <= low_threshold
    if stock_filter == "out":
        return stock == 0
    return True


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

FRAMES_TABLE: TableSpec[Frame] = TableSpec(
    collection="frames",
    title="Armaduras",
    columns=[
        ColumnDef("name", "Nombre"),
        ColumnDef("brand", "Marca"),
        ColumnDef("model", "Modelo"),
        ColumnDef("color", "Color"),
        ColumnDef("material", "Material", filter_fn=equals_value),
        ColumnDef("size", "Medida", sortable=False),
        ColumnDef(
            "stock",
            "Stock",
            filter_fn=lambda stock, f: matches_stock_filter(stock, f, FRAME_LOW_STOCK),
        ),
        ColumnDef("stock_label", "Estado", accessor=lambda f: stock_status(f.stock, FRAME_LOW_STOCK)[0]),
        ColumnDef("price", "Precio", accessor=lambda f: float(f.price), filterable=False),
    ],
    fetch=lambda gateway: gateway.select("frames"),
    global_filter_fn=text_search(
        lambda f: f.name,
        lambda f: f.brand,
        lambda f: f.model,
    ),
    empty_message="No se encontraron armaduras",
    search_placeholder="Buscar por nombre, marca o modelo...",
)


def frame_filters(stock_filter: StockFilter = "all") -> dict[str, Any]:
    return {"stock": None if stock_filter == "all" else stock_filter}


def list_frames(
    gateway: DataGateway,
    params: TableParams,
    stock_filter: StockFilter = "all",
) -> TableResponse:
    return render_table(
        FRAMES_TABLE,
        gateway,
        params,
        FrameResponse.model_validate,
        frame_filters(stock_filter),
    )


def get_frame(gateway: DataGateway, frame_id: int) -> Frame:
    return gateway.get("frames", frame_id)


def create_frame(gateway: DataGateway, data: FrameCreate) -> Frame:
    frame = gateway.insert("frames", data.model_dump())
    logger.info("Frame created id=%s '%s %s'", frame.id, frame.brand, frame.model)
    return frame


def update_frame(gateway: DataGateway, frame_id: int, data: FrameUpdate) -> Frame:
    return gateway.update("frames", frame_id, data.model_dump(exclude_unset=True))


def delete_frame(gateway: DataGateway, frame_id: int) -> None:
    gateway.delete("frames", frame_id)


# ---------------------------------------------------------------------------
# Crystals
# ---------------------------------------------------------------------------

CRYSTALS_TABLE: TableSpec[Crystal] = TableSpec(
    collection="crystals",
    title="Cristales",
    columns=[
        ColumnDef("type", "Tipo"),
        ColumnDef("material", "Material", filter_fn=equals_value),
        ColumnDef("index", "Índice", filterable=False),
        ColumnDef(
            "coating",
            "Tratamiento",
            accessor=lambda c: COATING_LABELS.get(c.coating, c.coating) if c.coating else None,
        ),
        ColumnDef("diameter", "Diámetro", filterable=False),
        ColumnDef(
            "stock",
            "Stock",
            filter_fn=lambda stock, f: matches_stock_filter(stock, f, CRYSTAL_LOW_STOCK),
        ),
        ColumnDef("stock_label", "Estado", accessor=lambda c: stock_status(c.stock, CRYSTAL_LOW_STOCK)[0]),
        ColumnDef("price", "Precio", accessor=lambda c: float(c.price), filterable=False),
    ],
    fetch=lambda gateway: gateway.select("crystals"),
    global_filter_fn=text_search(
        lambda c: c.type,
        lambda c: c.material,
        lambda c: c.coating,
    ),
    empty_message="No se encontraron cristales",
    search_placeholder="Buscar por tipo, material o tratamiento...",
)


def crystal_filters(
    material: str | None = None, stock_filter: StockFilter = "all"
) -> dict[str, Any]:
    return {"material": material, **frame_filters(stock_filter)}


def list_crystals(
    gateway: DataGateway,
    params: TableParams,
    material: str | None = None,
    stock_filter: StockFilter = "all",
) -> TableResponse:
    return render_table(
        CRYSTALS_TABLE,
        gateway,
        params,
        CrystalResponse.model_validate,
        crystal_filters(material, stock_filter),
    )


def get_crystal(gateway: DataGateway, crystal_id: int) -> Crystal:
    return gateway.get("crystals", crystal_id)


def create_crystal(gateway: DataGateway, data: CrystalCreate) -> Crystal:
    crystal = gateway.insert("crystals", data.model_dump())
    logger.info("Crystal created id=%s type='%s'", crystal.id, crystal.type)
    return crystal


def update_crystal(gateway: DataGateway, crystal_id: int, data: CrystalUpdate) -> Crystal:
    return gateway.update("crystals", crystal_id, data.model_dump(exclude_unset=True))


def delete_crystal(gateway: DataGateway, crystal_id: int) -> None:
    gateway.delete("crystals", crystal_id)


# ---------------------------------------------------------------------------
# Shared stock control
# ---------------------------------------------------------------------------


def adjust_stock(gateway: DataGateway, collection: str, item_id: int, delta: int) -> Any:
    """Add *delta* units to an item's stock, never going below zero.

    Args:
        gateway: Gateway bound to the caller.
        collection: ``"frames"`` or ``"crystals"``.
        item_id: Primary key of the item.
        delta: Signed change, typically ``+1`` / ``-1`` from the UI buttons.

    Returns:
        The updated row.
    """
    item = gateway.get(collection, item_id)
    new_stock = max(0, item.stock + delta)
    logger.info(
        "adjust_stock %s id=%s: %d %+d -> %d",
        collection, item_id, item.stock, delta, new_stock,
    )
    return gateway.update(collection, item_id, {"stock": new_stock})
