# caixapos

A small console point-of-sale till for a corner shop. It keeps a catalogue of
products with their stock, lets a cashier ring up a sale for a numbered
customer, takes payment and prints a receipt with totals before and after VAT.
The screens and messages are in Portuguese.

## Installing

```
pip install .
```

## Running the till

```
caixapos
```

The command takes no options other than `--help`. The main menu offers:

- **1 - Efetuar venda**: enter the customer number (greater than zero), pick
  products by ID and quantity, then either keep buying or go to checkout.
  Shelf prices carry a 30% markup over the cost price, and 23% VAT is added
  at checkout. One sale in a hundred, drawn at random, is free. Payment below
  the total is refused and asked for again; the receipt shows the change.
- **2 - Adicionar produto**: add a new product with a price and stock. If an
  active product with the same name exists (ignoring case), only the stock is
  asked for and added to it.
- **3 - Eliminar produto**: withdraw a product from sale by its ID. The ID is
  asked for again until an active product is given.
- **9 - Sair**: leave. The till also stops when input ends.

The store starts with three products, Cafe, Leite and Pao, and holds at most
100 products, withdrawn ones included.

When output goes to a terminal the screen is cleared between menus. Messages
stay on screen for a few seconds, and the receipt and some errors wait for
Enter.

## Using it from Python

```python
from caixapos.store import default_store, format_products

store = default_store()
print(format_products(store.active_products(), with_markup=True))

sale = store.new_sale(customer_id=7)
sale.add(store.find(1), 2)
receipt = store.complete_sale(sale, paid=10.0, free=False)
print(receipt.render())
print(receipt.change())
```

`caixapos.store` holds `Store`, `Product`, `Sale`, `CartLine` and `Receipt`.
`Store.add_product`, `restock`, `remove_product`, `find` and `find_by_name`
manage the catalogue; `Store.new_sale` and `Store.complete_sale` run a sale,
deducting stock and numbering receipts from 1.

Errors are raised as subclasses of `StoreError`: `InvalidValueError`,
`ProductNotFoundError`, `InsufficientStockError`, `StoreFullError`,
`EmptyCartError` and `InsufficientPaymentError`.

The interactive console is `caixapos.cli.ConsoleApp`. It takes the store, an
input function, an output stream, a `random.Random` for the free-sale draw and
a pause function, so it can be driven from scripts and tests.

## What it does not do

The catalogue, sales and invoice numbers live in memory only. Nothing is saved
to disk, so every start begins again with the opening catalogue and invoice
number 1. Receipts are printed to the console, not to a printer or a file.

## Tests

```
pip install .[test]
pytest
```