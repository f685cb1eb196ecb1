"""Tests for rendering the cart into the page"""
from stripe_cart.services import CartEngine, CartRenderer, Page, StorefrontCart, format_money
from tests.helpers import stored_items, text_of


def rows(page):
    return page.select("#cart-items .cart-item")


def test_mount_renders_empty_state(cart, page):
    assert text_of(page, ".cart-count") == ["0", "0"]
    for badge in page.select(".cart-count"):
        assert "display: none" in badge["style"]

    assert text_of(page, "#cart-items") == ["Your cart is empty"]
    assert text_of(page, ".cart-total") == ["$0.00", "$0.00"]
    assert all(button.has_attr("disabled") for button in page.select(".checkout-btn"))


def test_mount_renders_persisted_cart(page, settings, storage, http_client):
    first = StorefrontCart(page, settings, storage=storage, http_client=http_client)
    first.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")

    reloaded_page = Page(page.html(), url="https://shop.example/")
    reloaded = StorefrontCart(reloaded_page, settings, storage=storage, http_client=http_client)
    reloaded.mount()

    assert text_of(reloaded_page, ".cart-count") == ["1", "1"]
    assert len(rows(reloaded_page)) == 1


def test_add_updates_every_binding(cart, page):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")
    cart.add_to_cart("p2", "Sticker", 2.5, "/img/sticker.jpg")

    assert text_of(page, ".cart-count") == ["3", "3"]
    for badge in page.select(".cart-count"):
        assert "display: inline-flex" in badge["style"]
    assert text_of(page, ".cart-total") == ["$22.50", "$22.50"]
    assert not any(button.has_attr("disabled") for button in page.select(".checkout-btn"))

    first_row = rows(page)[0]
    assert first_row["data-price-id"] == "p1"
    assert first_row.select_one("img")["src"] == "/img/poster.jpg"
    assert first_row.select_one(".cart-item-name").get_text() == "Poster"
    assert first_row.select_one(".cart-item-price").get_text() == "$10.00 x 2"
    assert first_row.select_one(".cart-item-quantity").get_text() == "2"


def test_count_badge_keeps_other_styles(cart, page):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")
    header_badge = page.select(".cart-count")[0]

    assert "color: red" in header_badge["style"]


def test_row_controls_call_back_into_cart(cart, page, storage):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")

    page.click(rows(page)[0].select_one(".cart-qty-increase"))
    assert stored_items(storage)[0]["quantity"] == 2

    page.click(rows(page)[0].select_one(".cart-qty-increase"))
    page.click(rows(page)[0].select_one(".cart-qty-decrease"))
    assert stored_items(storage)[0]["quantity"] == 2
    assert text_of(page, ".cart-count") == ["2", "2"]

    page.click(rows(page)[0].select_one(".cart-remove-btn"))
    assert stored_items(storage) == []
    assert text_of(page, "#cart-items") == ["Your cart is empty"]


def test_decrease_from_one_removes_item(cart, page):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")

    page.click(rows(page)[0].select_one(".cart-qty-decrease"))

    assert cart.get_cart().is_empty
    assert rows(page) == []


def test_replaced_rows_lose_their_listeners(cart, page):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")
    stale_button = rows(page)[0].select_one(".cart-qty-increase")

    cart.update_cart_ui()

    assert page.click(stale_button) == []
    assert cart.get_cart_count() == 1


def test_render_is_idempotent(cart, page):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")
    cart.add_to_cart("p2", "Sticker", 2.5, "/img/sticker.jpg")

    cart.update_cart_ui()
    first = page.html()
    cart.update_cart_ui()

    assert page.html() == first


def test_item_fields_are_escaped(cart, page):
    cart.add_to_cart("p1", "<script>alert(1)</script>", 10, '" onerror="alert(1)')

    row = rows(page)[0]
    assert row.select("script") == []
    assert row.select_one(".cart-item-name").get_text() == "<script>alert(1)</script>"
    assert not row.select_one("img").has_attr("onerror")


def test_notification_dismisses_itself(cart, page):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")

    assert text_of(page, ".cart-notification") == ["Added to cart!"]

    page.advance(1.5)
    assert len(page.select(".cart-notification")) == 1

    cart.add_to_cart("p2", "Sticker", 2.5, "/img/sticker.jpg")
    page.advance(0.5)
    assert len(page.select(".cart-notification")) == 1

    page.advance(2.0)
    assert page.select(".cart-notification") == []
    assert page.pending_timers == 0


def test_only_adding_shows_notification(cart, page):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")
    page.advance(2.0)

    cart.update_quantity("p1", 3)
    cart.remove_from_cart("p1")

    assert page.select(".cart-notification") == []


def test_clear_renders_empty_state(cart, page):
    cart.add_to_cart("p1", "Poster", 10, "/img/poster.jpg")

    cart.clear_cart()

    assert cart.get_cart_count() == 0
    assert text_of(page, "#cart-items") == ["Your cart is empty"]
    assert text_of(page, ".cart-count") == ["0", "0"]


def test_add_to_cart_button(cart, page):
    button = page.select(".add-to-cart")[0]

    page.click(button)
    page.click(button)

    item = cart.get_cart().find("price_tee")
    assert item.quantity == 2
    assert item.name == "T-Shirt"
    assert item.price == 25.0
    assert cart.get_cart_total() == 50.0


def test_toggle_flips_dropdown_visibility(cart, page):
    dropdown = page.get_element_by_id("cart-dropdown")
    toggle = page.select(".cart-toggle")[0]

    assert page.click(toggle) == [True]
    assert "dn" not in dropdown["class"]

    assert page.click(toggle) == [False]
    assert "dn" in dropdown["class"]


def test_page_without_bindings_renders_nothing(store):
    page = Page("<html><body><p>About us</p></body></html>")
    renderer = CartRenderer(page)
    engine = CartEngine(store, on_change=lambda cart: renderer.render(cart, engine))

    engine.add_item("p1", "Poster", 10, "/img/poster.jpg")

    assert renderer.toggle_dropdown() is False
    assert "About us" in page.html()


def test_format_money():
    assert format_money(0) == "$0.00"
    assert format_money(22.5) == "$22.50"
    assert format_money(3.14159, "€") == "€3.14"


def test_string_price_renders(cart, page):
    cart.add_to_cart("p1", "Poster", "10", "/img/poster.jpg")

    assert rows(page)[0].select_one(".cart-item-price").get_text() == "$10.00 x 1"
    assert text_of(page, ".cart-total") == ["$10.00", "$10.00"]


def test_mount_tolerates_unparseable_price(settings, storage, http_client):
    page = Page("""
      <html><body>
        <span class="cart-count"></span>
        <div id="cart-items"></div>
        <button class="add-to-cart" data-price-id="p_bad" data-name="Odd" data-price="$5">Add</button>
        <button class="add-to-cart" data-price-id="p_ok" data-name="Fine" data-price="7.5">Add</button>
        <button class="checkout-btn">Checkout</button>
      </body></html>
    """)
    storefront = StorefrontCart(page, settings, storage=storage, http_client=http_client)

    storefront.mount()

    assert text_of(page, "#cart-items") == ["Your cart is empty"]
    bad_button, ok_button = page.select(".add-to-cart")
    page.click(bad_button)
    page.click(ok_button)

    cart = storefront.get_cart()
    assert cart.find("p_bad").price == 0
    assert cart.find("p_ok").price == 7.5
    assert text_of(page, ".cart-count") == ["2"]


def test_mounting_twice_binds_controls_once(cart, page):
    cart.mount()

    page.click(page.select(".add-to-cart")[0])

    assert cart.get_cart_count() == 1
    assert len(page.click(page.select(".cart-toggle")[0])) == 1
