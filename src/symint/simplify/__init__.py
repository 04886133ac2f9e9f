from .product_to_sum import product_to_sum_unit

__all__ = ["product_to_sum_unit"]
