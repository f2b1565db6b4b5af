"""Built-in storefront scenarios and the context they run with."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from ..config import E2EConfig
from ..models import ReportEvent, ReportStatus
from ..pages.cart import CartPage
from ..pages.login import LoginPage
from ..pages.products import ProductsPage, SortOption
from ..reporting.sink import ReportSink
from ..sync.actions import ActionSynchronizer


class ScenarioSkipped(Exception):
    """Raised by a scenario that cannot run in the current setup."""


@dataclass
class ScenarioContext:
    """Everything a scenario needs to drive one session."""

    name: str
    config: E2EConfig
    actions: ActionSynchronizer
    sink: ReportSink

    def log(self, message: str) -> None:
        self.sink.record(ReportEvent(case=self.name, status=ReportStatus.INFO, message=message))

    def login_page(self) -> LoginPage:
        return LoginPage(self.actions, self.config.app.base_url)

    def products_page(self) -> ProductsPage:
        return ProductsPage(self.actions, self.config.app.base_url)

    def cart_page(self) -> CartPage:
        return CartPage(self.actions, self.config.app.base_url)

    def open_login(self) -> LoginPage:
        self.log(f"Navigating to login page: {self.config.app.base_url}")
        page = self.login_page()
        page.open()
        page.wait_until_loaded()
        return page

    def login_as_standard_user(self) -> ProductsPage:
        credentials = self.config.credentials
        self.open_login().login(credentials.standard_user, credentials.password)
        products = self.products_page()
        products.wait_until_loaded()
        return products

    def skip(self, reason: str) -> None:
        raise ScenarioSkipped(reason)


ScenarioFunc = Callable[[ScenarioContext], None]


@dataclass(frozen=True)
class Scenario:
    """A named end-to-end check."""

    name: str
    description: str
    run: ScenarioFunc
    tags: tuple[str, ...] = field(default_factory=tuple)


SCENARIOS: dict[str, Scenario] = {}


def scenario(name: str, description: str, *tags: str) -> Callable[[ScenarioFunc], ScenarioFunc]:
    def register(func: ScenarioFunc) -> ScenarioFunc:
        if name in SCENARIOS:
            raise ValueError(f"Duplicate scenario name: {name}")
        SCENARIOS[name] = Scenario(name=name, description=description, run=func, tags=tags)
        return func

    return register


def select_scenarios(
    names: Optional[Iterable[str]] = None,
    tags: Optional[Iterable[str]] = None,
) -> list[Scenario]:
    """Return scenarios by name and/or tag, in registration order."""

    names = list(names or [])
    unknown = [name for name in names if name not in SCENARIOS]
    if unknown:
        raise KeyError(f"Unknown scenario(s): {', '.join(unknown)}")
    wanted_tags = set(tags or [])
    selected = []
    for item in SCENARIOS.values():
        if names and item.name not in names:
            continue
        if wanted_tags and not wanted_tags.intersection(item.tags):
            continue
        selected.append(item)
    return selected


def expect(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


BACKPACK = "Sauce Labs Backpack"
BIKE_LIGHT = "Sauce Labs Bike Light"
BOLT_SHIRT = "Sauce Labs Bolt T-Shirt"


@scenario("successful-login", "Verify user can login with valid credentials", "login")
def successful_login(ctx: ScenarioContext) -> None:
    page = ctx.open_login()
    credentials = ctx.config.credentials
    ctx.log(f"Entering username: {credentials.standard_user}")
    page.enter_username(credentials.standard_user)
    ctx.log("Entering password")
    page.enter_password(credentials.password)
    ctx.log("Clicking login button")
    page.click_login()
    products = ctx.products_page()
    products.wait_until_loaded()
    expect(products.title() == "Products", "Page title should be 'Products'")


def _expect_login_error(ctx: ScenarioContext, username: str, password: str, fragment: str) -> None:
    page = ctx.open_login()
    ctx.log(f"Attempting login as '{username}'")
    page.login(username, password)
    message = page.error_message()
    ctx.log(f"Error message: {message}")
    expect(page.is_error_displayed(), "Error message should be displayed")
    expect(fragment in message, f"Error message should contain '{fragment}'")


@scenario("invalid-username", "Verify login fails with invalid username", "login")
def invalid_username(ctx: ScenarioContext) -> None:
    _expect_login_error(
        ctx, "invalid_user", ctx.config.credentials.password, "Username and password do not match"
    )


@scenario("invalid-password", "Verify login fails with invalid password", "login")
def invalid_password(ctx: ScenarioContext) -> None:
    _expect_login_error(
        ctx, ctx.config.credentials.standard_user, "wrong_password", "Username and password do not match"
    )


@scenario("empty-credentials", "Verify login fails with empty username and password", "login")
def empty_credentials(ctx: ScenarioContext) -> None:
    _expect_login_error(ctx, "", "", "Username is required")


@scenario("empty-password", "Verify login fails with empty password", "login")
def empty_password(ctx: ScenarioContext) -> None:
    _expect_login_error(ctx, ctx.config.credentials.standard_user, "", "Password is required")


@scenario("locked-out-user", "Verify login with locked out user", "login")
def locked_out_user(ctx: ScenarioContext) -> None:
    _expect_login_error(
        ctx,
        ctx.config.credentials.locked_user,
        ctx.config.credentials.password,
        "Sorry, this user has been locked out",
    )


@scenario("products-displayed", "Verify products page displays all products", "products")
def products_displayed(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    count = products.product_count()
    ctx.log(f"Products displayed: {count}")
    expect(count == 6, "Should display 6 products")


@scenario("sort-name-asc", "Verify products can be sorted A to Z", "products")
def sort_name_asc(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    products.sort_products(SortOption.NAME_ASC)
    names = products.product_names()
    expect(names == sorted(names), "Products should be sorted A to Z")
    expect(names[0] == BACKPACK, f"First product should be '{BACKPACK}'")


@scenario("sort-name-desc", "Verify products can be sorted Z to A", "products")
def sort_name_desc(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    products.sort_products(SortOption.NAME_DESC)
    names = products.product_names()
    expect(names[0].startswith("Test.allTheThings()"), "First product should be Test.allTheThings()")


@scenario("sort-price-asc", "Verify products can be sorted by price low to high", "products")
def sort_price_asc(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    products.sort_products(SortOption.PRICE_ASC)
    prices = [_price(text) for text in products.product_prices()]
    expect(prices == sorted(prices), "Prices should be ascending")
    expect(prices[0] == 7.99, "Cheapest product should cost $7.99")


@scenario("sort-price-desc", "Verify products can be sorted by price high to low", "products")
def sort_price_desc(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    products.sort_products(SortOption.PRICE_DESC)
    prices = [_price(text) for text in products.product_prices()]
    expect(prices == sorted(prices, reverse=True), "Prices should be descending")
    expect(prices[0] == 49.99, "Most expensive product should cost $49.99")


@scenario("product-displayed", "Verify specific product is displayed", "products")
def product_displayed(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    expect(products.is_product_displayed(BACKPACK), f"'{BACKPACK}' should be displayed")
    expect(bool(products.product_price(BACKPACK)), "Product should have a price")


@scenario("add-to-cart", "Verify product can be added to cart", "products", "cart")
def add_to_cart(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    expect(not products.is_cart_badge_displayed(), "Cart should be empty initially")
    products.add_product_to_cart(BACKPACK)
    products.wait_for_cart_badge(1)
    expect(products.is_cart_badge_displayed(), "Cart badge should be displayed")
    expect(products.cart_badge_count() == 1, "Cart should show 1 item")


@scenario("add-multiple-to-cart", "Verify multiple products can be added to cart", "products", "cart")
def add_multiple_to_cart(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    for name in (BACKPACK, BIKE_LIGHT, BOLT_SHIRT):
        ctx.log(f"Adding {name}")
        products.add_product_to_cart(name)
    products.wait_for_cart_badge(3)
    expect(products.cart_badge_count() == 3, "Cart should show 3 items")


@scenario("cart-page", "Verify cart page can be accessed", "cart")
def cart_page(ctx: ScenarioContext) -> None:
    ctx.login_as_standard_user().open_cart()
    cart = ctx.cart_page()
    cart.wait_until_loaded()
    expect(cart.title() == "Your Cart", "Page title should be 'Your Cart'")


@scenario("empty-cart", "Verify empty cart displays no items", "cart")
def empty_cart(ctx: ScenarioContext) -> None:
    ctx.login_as_standard_user().open_cart()
    cart = ctx.cart_page()
    cart.wait_until_loaded()
    expect(cart.is_empty(), "Cart should be empty")


@scenario("item-in-cart", "Verify added item appears in cart", "cart")
def item_in_cart(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    products.add_product_to_cart(BACKPACK)
    products.open_cart()
    cart = ctx.cart_page()
    cart.wait_until_loaded()
    expect(cart.item_count() == 1, "Cart should have 1 item")
    expect(cart.is_item_in_cart(BACKPACK), "Product should be in cart")


@scenario("multiple-items-in-cart", "Verify multiple items in cart", "cart")
def multiple_items_in_cart(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    for name in (BACKPACK, BIKE_LIGHT, BOLT_SHIRT):
        products.add_product_to_cart(name)
    products.open_cart()
    cart = ctx.cart_page()
    cart.wait_until_loaded()
    expect(cart.item_count() == 3, "Cart should have 3 items")
    names = cart.item_names()
    for name in (BACKPACK, BIKE_LIGHT, BOLT_SHIRT):
        expect(name in names, f"'{name}' should be in cart")


@scenario("remove-from-cart", "Verify item can be removed from cart", "cart")
def remove_from_cart(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    products.add_product_to_cart(BACKPACK)
    products.open_cart()
    cart = ctx.cart_page()
    cart.wait_until_loaded()
    cart.remove_item(BACKPACK)
    expect(cart.is_empty(), "Cart should be empty after removing item")
    expect(not cart.is_item_in_cart(BACKPACK), "Product should not be in cart")


@scenario("continue-shopping", "Verify continue shopping returns to products page", "cart")
def continue_shopping(ctx: ScenarioContext) -> None:
    ctx.login_as_standard_user().open_cart()
    cart = ctx.cart_page()
    cart.wait_until_loaded()
    cart.continue_shopping()
    ctx.products_page().wait_until_loaded()


@scenario("cart-quantities", "Verify item quantities are displayed correctly", "cart")
def cart_quantities(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    products.add_product_to_cart(BACKPACK)
    products.open_cart()
    cart = ctx.cart_page()
    expect(cart.item_quantity(BACKPACK) == 1, "Item quantity should be 1")


@scenario("cart-prices", "Verify item prices are displayed in cart", "cart")
def cart_prices(ctx: ScenarioContext) -> None:
    products = ctx.login_as_standard_user()
    listed = products.product_price(BACKPACK)
    products.add_product_to_cart(BACKPACK)
    products.open_cart()
    cart = ctx.cart_page()
    expect(cart.item_price(BACKPACK) == listed, "Cart price should match product page price")


def _price(text: str) -> float:
    return float(text.strip().lstrip("$"))
