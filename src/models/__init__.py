"""Data models shared across the exporter."""

from src.models.conversion_result import ConversionResult

__all__ = ['ConversionResult']
