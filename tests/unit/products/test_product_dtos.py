"""Unit tests for product DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import PartialProductDTO, ProductDTO

pytestmark = pytest.mark.unit


def _data(**overrides):
    data = {"name": "Webcam HD", "unit_price": "1500.00", "stock_quantity": 15}
    data.update(overrides)
    return data


class TestProductDTO:
    def test_valid(self):
        dto = ProductDTO(**_data())
        assert dto.product_id == 0
        assert dto.unit_price == Decimal("1500.00")
        assert dto.description == ""

    def test_strips_name(self):
        assert ProductDTO(**_data(name="  Webcam  ")).name == "Webcam"

    @pytest.mark.parametrize("price", ["0", "-1.00"])
    def test_price_must_be_positive(self, price):
        with pytest.raises(ValidationError, match="greater than zero"):
            ProductDTO(**_data(unit_price=price))

    def test_price_has_at_most_two_decimals(self):
        with pytest.raises(ValidationError):
            ProductDTO(**_data(unit_price="1.001"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            ProductDTO(**_data(stock_quantity=-1))

    @pytest.mark.parametrize("name", ["A", "x" * 101])
    def test_name_length(self, name):
        with pytest.raises(ValidationError):
            ProductDTO(**_data(name=name))

    def test_description_length(self):
        with pytest.raises(ValidationError):
            ProductDTO(**_data(description="d" * 501))

    def test_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductDTO()
        missing = {error["loc"][0] for error in exc_info.value.errors()}
        assert missing == {"name", "unit_price", "stock_quantity"}


class TestPartialProductDTO:
    def test_all_optional(self):
        dto = PartialProductDTO()
        assert dto.model_dump(exclude_none=True) == {"product_id": 0}

    def test_validates_supplied_price(self):
        with pytest.raises(ValidationError):
            PartialProductDTO(unit_price="0")
