"""
Operator confirmation of generated SEO values.
"""

import logging
from typing import Callable

from .models import Product, SeoPair


class AutoApprove:
    """Approve everything. Used when interactive confirmation is off."""

    def approve(self, product: Product, pair: SeoPair) -> bool:
        return True


class ConsoleConfirmer:
    """Show the generated values and ask y/n until a valid answer is given."""

    def __init__(self, input_fn: Callable[[str], str] = input,
                 print_fn: Callable[[str], None] = print):
        self.input_fn = input_fn
        self.print_fn = print_fn

    def approve(self, product: Product, pair: SeoPair) -> bool:
        self.print_fn(f"Product {product.id}: {product.name}")
        self.print_fn(f"Meta Title: {pair.title}")
        self.print_fn(f"Meta Description: {pair.description}")
        while True:
            try:
                answer = self.input_fn("Do you approve these values? (y/n): ").strip()
            except EOFError:
                logging.warning(f"No input available, skipping product {product.id}")
                return False

            if answer == "y":
                return True
            if answer == "n":
                self.print_fn("Skipping this product...")
                return False
            self.print_fn("Invalid input. Please enter 'y' or 'n'.")
