"""Pytest configuration and fixtures"""
import httpx
import pytest

from stripe_cart.core.config import Settings
from stripe_cart.database import CartStore, MemoryStorage
from stripe_cart.services import Page, StorefrontCart

PAGE_HTML = """
<html>
<body>
  <header>
    <a class="cart-toggle" href="#">Cart <span class="cart-count" style="color: red">0</span></a>
    <div id="cart-dropdown" class="cart-dropdown dn">
      <div id="cart-items"></div>
      <div>Total: <span class="cart-total"></span></div>
      <button class="checkout-btn">Checkout</button>
    </div>
  </header>
  <main>
    <button class="add-to-cart" data-price-id="price_tee" data-name="T-Shirt"
            data-price="25" data-image="/img/tee.jpg">Add to cart</button>
  </main>
  <footer>
    <span class="cart-count"></span>
    <span class="cart-total"></span>
    <button class="checkout-btn">Checkout</button>
  </footer>
</body>
</html>
"""


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file"""
    return Settings(_env_file=None, site_origin="https://shop.example")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return CartStore(storage)


@pytest.fixture
def page():
    return Page(PAGE_HTML, url="https://shop.example/products/tee/")


@pytest.fixture
def requests_seen():
    """Requests captured by the mock checkout transport"""
    return []


@pytest.fixture
def checkout_handler():
    """Response returned by the mock checkout transport; tests replace it"""
    return {"handler": lambda request: httpx.Response(200, json={"url": "https://pay/xyz"})}


@pytest.fixture
def http_client(requests_seen, checkout_handler):
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return checkout_handler["handler"](request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def cart(page, settings, storage, http_client):
    storefront = StorefrontCart(page, settings, storage=storage, http_client=http_client)
    storefront.mount()
    return storefront
