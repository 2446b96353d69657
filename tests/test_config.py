"""
Unit tests for application settings.
"""
import pytest
from pydantic import ValidationError

from app.config import Settings


class TestNestedPlotSizes:
    """Tests for nested plot size validation."""

    def test_defaults(self):
        assert Settings().nested_plot_sizes == [25.0, 100.0, 400.0, 1600.0]

    @pytest.mark.parametrize("sizes", [[25, 0, 400], [-100], []])
    def test_rejects_invalid_sizes(self, sizes):
        with pytest.raises(ValidationError, match="nested_plot_sizes"):
            Settings(nested_plot_sizes=sizes)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("NESTED_PLOT_SIZES", "[1, 4, 16]")

        assert Settings().nested_plot_sizes == [1.0, 4.0, 16.0]

    def test_rejects_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("NESTED_PLOT_SIZES", "[100, -4]")

        with pytest.raises(ValidationError):
            Settings()
