import io

import pytest

import catalog
import storefront
from core.session import StorefrontSession


@pytest.fixture
def registered(monkeypatch, gateway):
    monkeypatch.setitem(catalog.GATEWAYS, "fake", gateway)
    return gateway


@pytest.fixture
def offline(monkeypatch, offline_gateway):
    monkeypatch.setitem(catalog.GATEWAYS, "offline", offline_gateway)
    return offline_gateway


def test_products_command(registered, capsys):
    assert storefront.main(["--source", "fake", "products", "--sort", "low"]) == 0
    out = capsys.readouterr().out
    assert out.index("[1]") < out.index("[14]")


def test_products_command_without_data(offline, capsys):
    assert storefront.main(["--source", "offline", "products"]) == 1
    assert storefront.NO_DATA in capsys.readouterr().out


def test_categories_command(registered, capsys):
    assert storefront.main(["--source", "fake", "categories"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "all"


def test_product_command(registered, capsys):
    assert storefront.main(["--source", "fake", "product", "5"]) == 0
    assert "Solid Gold" in capsys.readouterr().out
    assert storefront.main(["--source", "fake", "product", "404"]) == 1


def test_unknown_source(capsys):
    assert storefront.main(["--source", "nowhere", "products"]) == 1


def _run_shell(gateway, script):
    session = StorefrontSession(gateway, dark=False)
    out = io.StringIO()
    shell = storefront.ShopShell(session, stdin=io.StringIO(script), stdout=out)
    shell.cmdloop(intro="")
    return session, out.getvalue()


def test_shop_session_add_update_checkout(gateway):
    script = "\n".join(
        [
            "add 1",
            "add 1 m",
            "add 5",
            "add 5",
            "qty 5 3",
            "remove 14",
            "checkout",
            "A",
            "a@b.com",
            "X",
            "upi",
            "abc",
            "checkout",
            "A",
            "a@b.com",
            "X",
            "cod",
            "quit",
            "",
        ]
    )
    session, out = _run_shell(gateway, script)

    assert "Please select a size" in out
    assert "Invalid UPI id" in out
    assert "order placed, pay on delivery" in out
    assert [(l.id, l.qty, l.size) for l in session.cart] == [(1, 1, "M"), (5, 3, None)]


def test_shop_theme_and_html(gateway, tmp_path):
    target = tmp_path / "cart.html"
    session, out = _run_shell(gateway, f"add 7\ntheme\nhtml {target}\nquit\n")

    assert session.dark
    assert "Dark mode" in out
    assert "#121212" in target.read_text(encoding="utf-8")


def test_shop_rejects_bad_input(gateway):
    script = "add\nview abc\nqty 1\nadd 404\ncheckout\nA\na@b.com\nX\nbitcoin\nquit\n"
    session, out = _run_shell(gateway, script)

    assert "usage: add ID [SIZE]" in out
    assert "usage: view ID" in out
    assert "usage: qty ID N" in out
    assert "Product 404 not found." in out
    assert "Unknown payment method 'bitcoin'." in out
    assert session.cart.is_empty()


def test_shop_list_filters(gateway):
    _, out = _run_shell(gateway, "list gold --category jewelery\nquit\n")
    assert "Solid Gold" in out
    assert "Backpack" not in out


def test_run_returns_main_exit_code(registered, capsys):
    assert storefront.run(["--source", "fake", "categories"]) == 0


def test_run_maps_unexpected_errors_to_exit_code_2(monkeypatch):
    def boom(argv=None):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(storefront, "main", boom)
    assert storefront.run([]) == 2


def test_run_maps_interrupt_to_exit_code_130(monkeypatch):
    def interrupted(argv=None):
        raise KeyboardInterrupt

    monkeypatch.setattr(storefront, "main", interrupted)
    assert storefront.run([]) == 130


def test_log_level_option(registered, monkeypatch):
    seen = []
    monkeypatch.setattr(storefront, "set_level", seen.append)
    assert storefront.main(["--source", "fake", "--log-level", "debug", "categories"]) == 0
    assert seen == ["DEBUG"]
