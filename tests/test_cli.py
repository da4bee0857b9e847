import io

import pytest

from caixapos.cli import ConsoleApp, logo, main
from caixapos.store import Sale, default_store


class FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, n):
        return self.value


def scripted(answers):
    it = iter(answers)

    def read(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


def make_app(answers, draw=50, store=None):
    store = store if store is not None else default_store()
    out = io.StringIO()
    app = ConsoleApp(store, scripted(answers), out, FixedRng(draw), lambda s: None)
    return app, out, store


def test_logo_has_banner_art():
    art = logo()
    assert "|_|" in art
    assert "| |__) |" in art


def test_run_exit_option():
    app, out, _ = make_app(["9"])
    app.run()
    assert "Obrigado, e volte sempre!" in out.getvalue()


def test_run_rejects_invalid_menu_option():
    app, out, _ = make_app(["7", "abc", "9"])
    app.run()
    text = out.getvalue()
    assert text.count("Insira um valor valido presente no menu.") == 2
    assert "Obrigado, e volte sempre!" in text


def test_run_ends_quietly_on_end_of_input():
    app, out, _ = make_app([])
    app.run()
    assert "1 - Efetuar venda" in out.getvalue()


def test_sell_paid_sale_updates_stock_and_prints_receipt():
    store = default_store()
    initial = store.find(1).stock
    app, out, store = make_app(["5", "1", "2", "2", "100"], store=store)
    receipt = app.sell()
    assert store.find(1).stock == initial - 2
    assert receipt.customer_id == 5
    assert receipt.paid == 100.0
    assert receipt.change() == pytest.approx(100.0 - receipt.lines[0].gross_total())
    text = out.getvalue()
    assert "Compra registada com sucesso!" in text
    assert "Compra realizada com sucesso!" in text
    assert "Numero da Fatura: 1" in text
    assert "Numero do Cliente: 5" in text


def test_sell_free_draw_charges_nothing():
    store = default_store()
    initial = store.find(3).stock
    app, out, store = make_app(["4", "3", "1", "2"], draw=0, store=store)
    receipt = app.sell()
    assert receipt.paid == 0.0
    assert receipt.change() == 0.0
    assert store.find(3).stock == initial - 1
    assert "totalmente gratuita" in out.getvalue()


def test_sell_retries_insufficient_payment():
    app, out, _ = make_app(["2", "1", "3", "2", "1", "0", "x", "100"])
    receipt = app.sell()
    text = out.getvalue()
    assert "Valor insuficiente, tente novamente." in text
    assert "Preco a pagar tem de ser maior que zero." in text
    assert "Insira um valor valido." in text
    assert receipt.paid == 100.0


def test_sell_rejects_bad_customer_ids():
    app, out, _ = make_app(["0", "abc", "3", "1", "1", "2", "50"])
    receipt = app.sell()
    text = out.getvalue()
    assert "ID tem de ser maior que zero." in text
    assert "Insira um valor valido." in text
    assert receipt.customer_id == 3


def test_sell_reports_insufficient_stock_then_continues():
    store = default_store()
    initial = store.find(2).stock
    answers = ["1", "2", str(initial + 1), "1", "2", "1", "2", "100"]
    app, out, store = make_app(answers, store=store)
    receipt = app.sell()
    assert "Stock insuficiente, so existe" in out.getvalue()
    assert receipt.lines[0].quantity == 1
    assert store.find(2).stock == initial - 1


def test_sell_merges_repeated_product():
    answers = ["1", "1", "2", "1", "1", "3", "2", "100"]
    app, out, _ = make_app(answers)
    receipt = app.sell()
    assert len(receipt.lines) == 1
    assert receipt.lines[0].quantity == 2 + 3
    assert "Compra atualizada com sucesso!" in out.getvalue()


def test_sell_unknown_product_then_empty_checkout():
    app, out, _ = make_app(["1", "42", "2"])
    with pytest.raises(EOFError):
        app.sell()
    text = out.getvalue()
    assert "Produto nao encontrado!" in text
    assert "Ainda nao efetuou nenhuma compra!" in text


def test_checkout_empty_sale_returns_none():
    app, out, _ = make_app([])
    assert app.checkout(Sale(1)) is None
    assert "Ainda nao efetuou nenhuma compra!" in out.getvalue()


def test_new_product_adds_to_catalogue():
    app, out, store = make_app(["Cha", "2.5", "10", "2"])
    app.new_product()
    product = store.find_by_name("Cha")
    assert product.price == 2.5
    assert product.stock == 10
    assert product.id == len(store.products)
    assert "Produto adicionado com sucesso!" in out.getvalue()


def test_new_product_restocks_existing_name():
    store = default_store()
    initial = store.find(1).stock
    app, out, store = make_app(["cafe", "5", "2"], store=store)
    app.new_product()
    assert store.find(1).stock == initial + 5
    assert "Ja existe um artigo com o nome 'cafe'" in out.getvalue()


def test_new_product_rejects_bad_price_and_restarts():
    app, out, store = make_app(["Agua", "-1", "Agua", "1", "4", "2"])
    app.new_product()
    assert "Preco tem de ser maior que zero." in out.getvalue()
    assert store.find_by_name("agua").stock == 4


def test_new_product_continue_adding():
    app, _, store = make_app(["Cha", "1", "1", "1", "Mel", "3", "2", "2"])
    app.new_product()
    assert store.find_by_name("Cha") is not None
    assert store.find_by_name("Mel").stock == 2


def test_new_product_full_store():
    store = default_store()
    store.max_products = len(store.products)
    app, out, store = make_app([], store=store)
    app.new_product()
    assert "Atingiu o limite de produtos!" in out.getvalue()
    assert len(store.products) == store.max_products


def test_delete_product_retries_until_found():
    app, out, store = make_app(["99", "2"])
    app.delete_product()
    text = out.getvalue()
    assert "Produto nao encontrado! Verifique o ID e tente novamente." in text
    assert "Produto 'Leite' eliminado com sucesso!" in text
    assert [p.id for p in store.active_products()] == [1, 3]


def test_run_full_sale_then_exit():
    app, out, store = make_app(["1", "5", "1", "2", "2", "100", "9"])
    app.run()
    text = out.getvalue()
    assert "Compra realizada com sucesso!" in text
    assert text.rstrip().endswith("Obrigado, e volte sempre!")
    assert store.next_invoice == 2


def test_main_exits_on_option_nine(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt="": "9")
    assert main([]) == 0
    assert "Obrigado, e volte sempre!" in capsys.readouterr().out