"""Utilities for resolving product and customer references to IDs."""

from shopkeep.domain.customer import CustomerService
from shopkeep.domain.product import ProductService


def resolve_product(product_service: ProductService, product: str) -> str:
    """Resolve a product ID or exact name (case-insensitive) to a product ID.

    Args:
        product_service: ProductService instance
        product: Product ID or name

    Returns:
        Product ID

    Raises:
        ValueError: If no product matches, or a name matches several products
    """
    if product_service.get_product(product) is not None:
        return product

    matches = [p for p in product_service.list_products() if p.name.lower() == product.lower()]
    if len(matches) == 1:
        return matches[0].id
    if len(matches) > 1:
        raise ValueError(f"Several products are named '{product}'; use the product ID")
    raise ValueError(f"Product '{product}' not found")


def resolve_customer(customer_service: CustomerService, customer: str) -> str:
    """Resolve a customer ID or exact name (case-insensitive) to a customer ID.

    Raises:
        ValueError: If no customer matches, or a name matches several customers
    """
    if customer_service.get_customer(customer) is not None:
        return customer

    matches = [c for c in customer_service.list_customers() if c.name.lower() == customer.lower()]
    if len(matches) == 1:
        return matches[0].id
    if len(matches) > 1:
        raise ValueError(f"Several customers are named '{customer}'; use the customer ID")
    raise ValueError(f"Customer '{customer}' not found")
