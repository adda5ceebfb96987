"""Test stackview.utils._json_encoder."""

from __future__ import annotations

import datetime
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from stackview.core.models import Output
from stackview.utils import JsonEncoder


class TestJsonEncoder:
    """Test JsonEncoder."""

    @pytest.mark.parametrize(
        "provided, expected",
        [
            (("foo", "bar"), list),
            (Decimal("1.1"), float),
            (Path.cwd() / ".stackview", str),
            (Output(name="BucketArn"), dict),
            (datetime.date(2010, 9, 9), str),
            (datetime.datetime.now(), str),
            ({"foo"}, list),
        ],
    )
    def test_supported_types(self, provided: Any, expected: type) -> None:
        """Test encoding of supported data types."""
        assert isinstance(JsonEncoder().default(provided), expected)

    @pytest.mark.parametrize("provided", [(None), (object())])
    def test_unsupported_types(self, provided: Any) -> None:
        """Test encoding of unsupported data types."""
        with pytest.raises(TypeError):
            assert not JsonEncoder().default(provided)

    def test_dumps(self) -> None:
        """Test use with json.dumps."""
        assert json.dumps({"date": datetime.date(2010, 9, 9)}, cls=JsonEncoder) == (
            '{"date": "2010-09-09"}'
        )
