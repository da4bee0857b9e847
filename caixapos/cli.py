"""Interactive console front end for the shop counter."""

from __future__ import annotations

import argparse
import math
import random
import sys
import time
from typing import Callable, Optional, TextIO

from caixapos.store import (
    InsufficientPaymentError,
    InsufficientStockError,
    InvalidValueError,
    ProductNotFoundError,
    Receipt,
    Sale,
    Store,
    StoreError,
    StoreFullError,
    default_store,
    format_products,
)

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
CYAN = "\033[36m"

MESSAGE_DELAY = 3.0
LONG_MESSAGE_DELAY = 4.0

_LOGO = r"""
     _____                                        
    |  __ \                           _       _   
    | |__) |__  _   _ _ __   ___    _| |_   _| |_ 
    |  ___/ _ \| | | | '_ \ / _ \  |_   _| |_   _|
    | |  | (_) | |_| | |_) |  __/    |_|     |_|  
    |_|   \___/ \__,_| .__/ \___|                 
                     | |                          
                     |_|                          
    """

InputFunc = Callable[[str], str]
PauseFunc = Callable[[Optional[float]], None]


def logo() -> str:
    """The shop's ASCII-art banner."""
    return _LOGO


class ConsoleApp:
    """Menu-driven terminal session over a :class:`Store`.

    ``pause`` is called with a number of seconds for timed messages and
    with ``None`` where the user must acknowledge before going on.
    """

    def __init__(
        self,
        store: Store | None = None,
        input_func: InputFunc | None = None,
        output: TextIO | None = None,
        rng: random.Random | None = None,
        pause: PauseFunc | None = None,
    ) -> None:
        self.store = store if store is not None else default_store()
        self._input = input_func if input_func is not None else input
        self._out = output if output is not None else sys.stdout
        self._rng = rng if rng is not None else random.Random()
        self._pause = pause if pause is not None else self._default_pause

    # -- output helpers -------------------------------------------------

    def _default_pause(self, seconds: float | None) -> None:
        if seconds is None:
            self._input("Prima Enter para continuar...")
        else:
            time.sleep(seconds)

    def _say(self, text: str = "") -> None:
        self._out.write(text + "\n")
        self._out.flush()

    def _clear(self) -> None:
        isatty = getattr(self._out, "isatty", None)
        if isatty is not None and isatty():
            self._out.write("\033[2J\033[H")

    def _banner(self) -> None:
        self._clear()
        self._say(f"{CYAN}{logo()}{RESET}\n")

    def _error(self, message: str, delay: float | None = MESSAGE_DELAY) -> None:
        self._say(f"{RED}{message}{RESET}")
        self._pause(delay)

    def _success(self, message: str, delay: float | None = MESSAGE_DELAY) -> None:
        self._say(f"{GREEN}{message}{RESET}")
        self._pause(delay)

    # -- input helpers --------------------------------------------------

    def _ask_int(self, prompt: str) -> int | None:
        text = self._input(prompt).strip()
        try:
            return int(text)
        except ValueError:
            self._clear()
            self._error("Insira um valor valido.")
            return None

    def _ask_float(self, prompt: str) -> float | None:
        text = self._input(prompt).strip()
        try:
            value = float(text)
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            self._clear()
            self._error("Insira um valor valido.")
            return None
        return value

    def _menu_choice(self, lines: list[str], valid: set[int], prompt: str) -> int:
        while True:
            self._banner()
            for line in lines:
                self._say(line)
            choice = self._ask_menu_int(prompt)
            if choice in valid:
                return choice
            self._clear()
            self._error("Insira um valor valido presente no menu.")

    def _ask_menu_int(self, prompt: str) -> int | None:
        try:
            return int(self._input(prompt).strip())
        except ValueError:
            return None

    def _continue_menu(self, adding: bool) -> int:
        if adding:
            lines = ["1 - Continuar a adicionar", "2 - Voltar"]
        else:
            lines = ["1 - Continuar a comprar", "2 - Checkout"]
        return self._menu_choice(lines, {1, 2}, "Selecione uma opcao: ")

    # -- flows ----------------------------------------------------------

    def run(self) -> None:
        """Show the main menu until the user leaves or input ends."""
        lines = [
            "1 - Efetuar venda",
            "2 - Adicionar produto",
            "3 - Eliminar produto",
            "",
            "",
            "9 - Sair",
            "",
        ]
        try:
            while True:
                choice = self._menu_choice(lines, {1, 2, 3, 9}, "Escolha uma opcao: ")
                if choice == 1:
                    self.sell()
                elif choice == 2:
                    self.new_product()
                elif choice == 3:
                    self.delete_product()
                else:
                    self._clear()
                    self._say("Obrigado, e volte sempre!\n")
                    return
        except EOFError:
            return

    def _ask_customer(self) -> Sale:
        while True:
            self._banner()
            customer_id = self._ask_int("Insira o numero do cliente: ")
            if customer_id is None:
                continue
            try:
                return self.store.new_sale(customer_id)
            except InvalidValueError as exc:
                self._clear()
                self._error(f"{exc}\n", None)

    def _pick_product(self, sale: Sale) -> None:
        while True:
            self._banner()
            self._say(format_products(self.store.products, with_markup=True))
            self._say("\n")
            product_id = self._ask_int("Que produto deseja comprar: ")
            if product_id is None:
                continue
            try:
                product = self.store.find(product_id)
            except ProductNotFoundError as exc:
                self._error(str(exc))
                return
            quantity = self._ask_int("\nQual a quantidade que quer comprar: ")
            if quantity is None:
                continue
            if quantity <= 0:
                self._error("Quantidade tem de ser maior que zero.\n", None)
                continue
            already = any(line.product_id == product.id for line in sale.lines)
            try:
                sale.add(product, quantity)
            except InsufficientStockError as exc:
                self._error(str(exc), LONG_MESSAGE_DELAY if already else MESSAGE_DELAY)
                return
            if already:
                self._success("Compra atualizada com sucesso!")
            else:
                self._success("Compra registada com sucesso!")
            return

    def sell(self) -> Receipt:
        """Run a sale from customer number to printed receipt."""
        sale = self._ask_customer()
        while True:
            self._pick_product(sale)
            while True:
                if self._continue_menu(adding=False) == 1:
                    break
                receipt = self.checkout(sale)
                if receipt is not None:
                    return receipt

    def checkout(self, sale: Sale) -> Receipt | None:
        """Take payment for ``sale``; ``None`` if the cart is empty."""
        while True:
            self._banner()
            if sale.is_empty():
                self._error("Ainda nao efetuou nenhuma compra!")
                return None
            self._say("<=======> Checkout - Resumo da compra <=======>\n")
            names = ", ".join(line.name for line in sale.lines)
            quantities = ", ".join(str(line.quantity) for line in sale.lines)
            self._say(f"Nome dos artigos: {names} ")
            self._say(f"Quantidade: {quantities} ")
            self._say(f"Preco total s/IVA: {sale.net_total():.2f}")
            self._say(f"Preco total c/IVA: {sale.gross_total():.2f}")

            if self._rng.randrange(100) == 0:
                self._success(
                    "\nParabens! Sua compra foi sorteada e sera totalmente gratuita!"
                )
                receipt = self.store.complete_sale(sale, free=True)
                self._print_receipt(receipt)
                return receipt

            paid = self._ask_float("\n\nInsira o valor que vai entregar: ")
            if paid is None:
                continue
            try:
                receipt = self.store.complete_sale(sale, paid)
            except InvalidValueError as exc:
                self._error(f"{exc}\n", None)
                continue
            except InsufficientPaymentError as exc:
                self._error(str(exc))
                continue
            self._success("Compra realizada com sucesso!")
            self._print_receipt(receipt)
            return receipt

    def _print_receipt(self, receipt: Receipt) -> None:
        self._banner()
        self._say(receipt.render())
        self._say()
        self._pause(None)

    def new_product(self) -> None:
        """Add products, or restock ones that exist, until the user goes back."""
        while True:
            self._banner()
            if len(self.store.products) >= self.store.max_products:
                self._error("Atingiu o limite de produtos!")
                return
            name = self._input("Insira o nome do novo produto: ")
            existing = self.store.find_by_name(name)
            if existing is not None:
                stock = self._ask_int("Insira o stock do novo produto: ")
                if stock is None:
                    continue
                try:
                    self.store.restock(existing.id, stock)
                except InvalidValueError as exc:
                    self._error(f"{exc}\n", None)
                    continue
                self._success(
                    f"Ja existe um artigo com o nome '{name}', a atualizar o stock "
                    "do produto ja existente"
                )
            else:
                price = self._ask_float("Insira o preco do novo produto: ")
                if price is None:
                    continue
                if price <= 0:
                    self._error("Preco tem de ser maior que zero.\n", None)
                    continue
                stock = self._ask_int("Insira o stock do novo produto: ")
                if stock is None:
                    continue
                try:
                    self.store.add_product(name, price, stock)
                except StoreFullError as exc:
                    self._error(str(exc))
                    return
                except StoreError as exc:
                    self._error(f"{exc}\n", None)
                    continue
                self._say()
                self._success("Produto adicionado com sucesso!")
            if self._continue_menu(adding=True) == 2:
                return

    def delete_product(self) -> None:
        """Withdraw a product from sale, asking again until one is found."""
        while True:
            self._banner()
            self._say(format_products(self.store.products, with_markup=False))
            product_id = self._ask_int("\n\nDigite o ID do produto que deseja eliminar: ")
            if product_id is None:
                continue
            try:
                product = self.store.remove_product(product_id)
            except ProductNotFoundError as exc:
                self._error(str(exc))
                continue
            self._success(f"Produto '{product.name}' eliminado com sucesso!")
            return


def main(argv: list[str] | None = None) -> int:
    """Start the shop counter console."""
    parser = argparse.ArgumentParser(
        prog="caixapos", description="Terminal de vendas da loja."
    )
    parser.parse_args(argv)
    ConsoleApp(default_store()).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())