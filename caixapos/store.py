"""Product catalogue, shopping cart and receipts for a small shop counter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

MAX_PRODUCTS = 100
MARKUP = 1.30
VAT_RATE = 1.23

RECEIPT_HEADER = "==================== TALAO ===================="
RECEIPT_FOOTER = "=============================================="
RECEIPT_RULE = "----------------------------------------------"


class StoreError(Exception):
    """Base class for every error raised by the store."""


class InvalidValueError(StoreError, ValueError):
    """A quantity, price, payment or identifier is out of range."""


class ProductNotFoundError(StoreError, LookupError):
    """No active product matches the given identifier."""


class InsufficientStockError(StoreError):
    """The requested quantity exceeds the stock available."""


class StoreFullError(StoreError):
    """The catalogue has reached its product limit."""


class EmptyCartError(StoreError):
    """A sale was completed without any purchase in it."""


class InsufficientPaymentError(StoreError):
    """The amount handed over does not cover the total due."""


@dataclass
class Product:
    """An item on sale; ``price`` is the cost price before markup."""

    id: int
    name: str
    price: float
    stock: int
    active: bool = True

    def sale_price(self) -> float:
        """Unit price shown to customers, cost price plus markup."""
        return self.price * MARKUP


@dataclass
class CartLine:
    """One product in a sale with the quantity bought."""

    product_id: int
    name: str
    quantity: int
    price: float

    def net_total(self) -> float:
        """Line total with markup, before VAT."""
        return (self.price * self.quantity) * MARKUP

    def gross_total(self) -> float:
        """Line total with markup and VAT."""
        return self.net_total() * VAT_RATE


@dataclass
class Sale:
    """A customer's cart while shopping."""

    customer_id: int
    lines: list[CartLine] = field(default_factory=list)

    def add(self, product: Product, quantity: int) -> CartLine:
        """Put ``quantity`` units of ``product`` in the cart, merging repeats."""
        if quantity <= 0:
            raise InvalidValueError("Quantidade tem de ser maior que zero.")
        if quantity > product.stock:
            raise InsufficientStockError(
                f"Stock insuficiente, so existe {product.stock} em stock."
            )
        for line in self.lines:
            if line.product_id == product.id:
                if line.quantity + quantity > product.stock:
                    raise InsufficientStockError(
                        f"Stock insuficiente! Apenas {product.stock} unidades "
                        f"disponiveis, e tem {line.quantity} unidades no carrinho."
                    )
                line.quantity += quantity
                return line
        line = CartLine(product.id, product.name, quantity, product.price)
        self.lines.append(line)
        return line

    def net_total(self) -> float:
        """Total with markup, before VAT."""
        return sum((line.net_total() for line in self.lines), 0.0)

    def gross_total(self) -> float:
        """Total with markup and VAT."""
        return self.net_total() * VAT_RATE

    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class Receipt:
    """A printed record of a completed sale."""

    number: int
    customer_id: int
    date: date
    lines: tuple[CartLine, ...]
    paid: float

    def _totals(self) -> tuple[float, float, float]:
        net = gross = vat = 0.0
        for line in self.lines:
            line_net = line.net_total()
            line_gross = line_net * VAT_RATE
            net += line_net
            gross += line_gross
            vat += line_gross - line_net
        return net, vat, gross

    def change(self) -> float:
        """Money returned to the customer; nothing for a free sale."""
        if self.paid == 0.0:
            return 0.0
        return self.paid - self._totals()[2]

    def render(self) -> str:
        """The receipt as printable text."""
        net, vat, gross = self._totals()
        out = [
            RECEIPT_HEADER,
            f"Numero da Fatura: {self.number}",
            f"Numero do Cliente: {self.customer_id}",
            f"Data: {self.date.year}-{self.date.month}-{self.date.day}",
            RECEIPT_RULE,
            "Produto\tQtd\tPreco s/IVA\tPreco c/IVA",
        ]
        for line in self.lines:
            line_net = line.net_total()
            out.append(
                f"{line.name}\t{line.quantity}\t{line_net:.2f}\t\t"
                f"{line_net * VAT_RATE:.2f}"
            )
        out += [
            RECEIPT_RULE,
            f"Total s/IVA: {net:.2f}",
            f"Valor do IVA (23%): {vat:.2f}",
            f"Total c/IVA: {gross:.2f}",
            f"Valor Entregue: {self.paid:.2f}",
            f"Troco: {self.change():.2f}",
            RECEIPT_FOOTER,
        ]
        return "\n".join(out)


class Store:
    """The shop's catalogue and invoice counter."""

    def __init__(
        self,
        products: Iterable[Product] | None = None,
        max_products: int = MAX_PRODUCTS,
    ) -> None:
        self.products: list[Product] = list(products or ())
        self.max_products = max_products
        self.next_invoice = 1

    def active_products(self) -> list[Product]:
        return [p for p in self.products if p.active]

    def find(self, product_id: int) -> Product:
        """Return the active product with ``product_id``."""
        for product in self.products:
            if product.id == product_id and product.active:
                return product
        raise ProductNotFoundError("Produto nao encontrado!")

    def find_by_name(self, name: str) -> Product | None:
        """Return the active product whose name matches, ignoring case."""
        wanted = name.lower()
        return next(
            (p for p in self.products if p.active and p.name.lower() == wanted),
            None,
        )

    def add_product(self, name: str, price: float, stock: int) -> Product:
        """Create a product, or add stock to an existing one of the same name."""
        if len(self.products) >= self.max_products:
            raise StoreFullError("Atingiu o limite de produtos!")
        existing = self.find_by_name(name)
        if existing is not None:
            return self.restock(existing.id, stock)
        if price <= 0:
            raise InvalidValueError("Preco tem de ser maior que zero.")
        if stock <= 0:
            raise InvalidValueError("Stock tem de ser maior que zero.")
        product = Product(len(self.products) + 1, name, price, stock)
        self.products.append(product)
        return product

    def restock(self, product_id: int, stock: int) -> Product:
        if stock <= 0:
            raise InvalidValueError("Stock tem de ser maior que zero.")
        product = self.find(product_id)
        product.stock += stock
        return product

    def remove_product(self, product_id: int) -> Product:
        """Withdraw a product from sale."""
        try:
            product = self.find(product_id)
        except ProductNotFoundError:
            raise ProductNotFoundError(
                "Produto nao encontrado! Verifique o ID e tente novamente."
            ) from None
        product.active = False
        return product

    def new_sale(self, customer_id: int) -> Sale:
        if customer_id <= 0:
            raise InvalidValueError("ID tem de ser maior que zero.")
        return Sale(customer_id)

    def complete_sale(self, sale: Sale, paid: float = 0.0, free: bool = False) -> Receipt:
        """Take payment, deduct stock and issue the receipt."""
        if sale.is_empty():
            raise EmptyCartError("Ainda nao efetuou nenhuma compra!")
        if free:
            paid = 0.0
        else:
            if paid <= 0:
                raise InvalidValueError("Preco a pagar tem de ser maior que zero.")
            if paid < sale.gross_total():
                raise InsufficientPaymentError("Valor insuficiente, tente novamente.")
        quantities = {line.product_id: line.quantity for line in sale.lines}
        for product in self.products:
            if product.id in quantities:
                product.stock -= quantities[product.id]
        receipt = Receipt(
            number=self.next_invoice,
            customer_id=sale.customer_id,
            date=date.today(),
            lines=tuple(
                CartLine(l.product_id, l.name, l.quantity, l.price) for l in sale.lines
            ),
            paid=paid,
        )
        self.next_invoice += 1
        return receipt


def default_store() -> Store:
    """A store stocked with the opening catalogue."""
    return Store(
        [
            Product(1, "Cafe", 1.20, 20),
            Product(2, "Leite", 0.80, 15),
            Product(3, "Pao", 0.50, 30),
        ]
    )


def format_products(products: Iterable[Product], with_markup: bool = False) -> str:
    """Tabulate active products, optionally at sale price."""
    out = [f"{'ID':<5}{'Nome':<20}{'Preco':<10}{'Stock':<10}", "-" * 45]
    for p in products:
        if not p.active:
            continue
        price = p.sale_price() if with_markup else p.price
        out.append(f"{p.id:<5}{p.name:<20}{price:<10.2f}{p.stock:<10}")
    return "\n".join(out)