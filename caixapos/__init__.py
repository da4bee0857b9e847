"""A console point-of-sale till with stock, checkout, VAT and receipts."""

__version__ = "0.1.0"
__all__ = ["cli", "store"]