"""Conversions from engine results and table rows to response schemas."""

from __future__ import annotations

from typing import List

from .. import crud, engine, models
from ..schemas.inventory import StockLevelRead
from ..schemas.preview import (
    AppliedSchemeRead,
    DisplayLineRead,
    EditPreviewRead,
    FundsCheckRead,
    OrderPreviewRead,
    StockCheckRead,
    SubmissionItemRead,
    TotalsRead,
)
from ..schemas.scheme import SchemeRead


def applied_scheme_read(applied: engine.AppliedScheme) -> AppliedSchemeRead:
    return AppliedSchemeRead(
        scheme_id=applied.scheme.id,
        description=applied.scheme.description,
        times_applied=applied.times_applied,
        get_sku_id=applied.scheme.get_sku_id,
        free_quantity=applied.free_quantity,
    )


def _preview_fields(preview: engine.OrderPreview) -> dict:
    funds = preview.funds_check
    return {
        "lines": [
            DisplayLineRead(
                sku_id=line.sku_id,
                sku_name=line.sku_name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                line_total=line.line_total,
                is_freebie=line.is_freebie,
                has_tier_price=line.has_tier_price,
                scheme_source=line.scheme_source,
            )
            for line in preview.lines
        ],
        "applied_schemes": [applied_scheme_read(a) for a in preview.applied_schemes],
        "totals": TotalsRead(
            subtotal=preview.totals.subtotal,
            gst_amount=preview.totals.gst_amount,
            grand_total=preview.totals.grand_total,
        ),
        "stock_check": StockCheckRead(
            has_issues=preview.stock_check.has_issues, issues=list(preview.stock_check.issues)
        ),
        "funds_check": FundsCheckRead(
            passes=funds.passes,
            required=funds.required,
            available=funds.available,
            needs_credit_confirmation=funds.needs_credit_confirmation,
            credit_draw=funds.credit_draw,
            message=funds.message,
        ),
        "can_submit": preview.can_submit,
        "submission": [SubmissionItemRead(sku_id=i.sku_id, quantity=i.quantity) for i in preview.submission],
    }


def order_preview_read(preview: engine.OrderPreview) -> OrderPreviewRead:
    return OrderPreviewRead(**_preview_fields(preview))


def edit_preview_read(preview: engine.EditPreview) -> EditPreviewRead:
    return EditPreviewRead(
        **_preview_fields(preview),
        original_total=preview.original_total,
        delta=preview.delta.amount,
        delta_direction=preview.delta.direction.value,
    )


def scheme_read(row: models.Scheme) -> SchemeRead:
    scope = crud.to_engine_scheme(row).scope.value
    return SchemeRead.model_validate({**row.model_dump(), "scope": scope})


def stock_read(rows: List[models.StockItem]) -> List[StockLevelRead]:
    return [
        StockLevelRead(
            location_id=row.location_id,
            sku_id=row.sku_id,
            quantity=row.quantity,
            reserved=row.reserved,
            available=row.quantity - row.reserved,
            updated_at=row.updated_at,
        )
        for row in rows
    ]
