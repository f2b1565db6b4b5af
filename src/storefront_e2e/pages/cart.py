"""Page object for the shopping cart."""

from __future__ import annotations

from ..models import Locator
from ..sync.conditions import text_contains
from .base import BasePage

TITLE = Locator.by_class("title", "page title")
CONTINUE_SHOPPING = Locator.by_id("continue-shopping", "continue shopping button")
CHECKOUT = Locator.by_id("checkout", "checkout button")
CART_ITEMS = Locator.by_class("cart_item", "cart item")
ITEM_NAMES = Locator.by_class("inventory_item_name", "cart item name")
ITEM_PRICES = Locator.by_class("inventory_item_price", "cart item price")

_ITEM = "//div[text()='{name}']/ancestor::div[@class='cart_item']"
ITEM_BY_NAME = Locator.xpath(_ITEM, "cart item '{name}'")
REMOVE_BUTTON_BY_NAME = Locator.xpath(
    _ITEM + "//button[text()='Remove']", "remove button of '{name}'"
)
QUANTITY_BY_NAME = Locator.xpath(
    _ITEM + "//div[@class='cart_quantity']", "quantity of '{name}'"
)
PRICE_BY_NAME = Locator.xpath(
    _ITEM + "//div[@class='inventory_item_price']", "price of '{name}'"
)


class CartPage(BasePage):
    """Cart listing with checkout and continue-shopping actions."""

    path = "/cart.html"

    def is_loaded(self) -> bool:
        return self._holds(text_contains(TITLE, "Your Cart"))

    def wait_until_loaded(self) -> None:
        self.actions.wait_until_visible(TITLE)
        self.actions.wait_until_text(TITLE, "Your Cart")

    def title(self) -> str:
        return self.actions.read(TITLE)

    def item_count(self) -> int:
        return self.actions.count(CART_ITEMS)

    def is_empty(self) -> bool:
        return self.item_count() == 0

    def item_names(self) -> list[str]:
        if self.is_empty():
            return []
        return self.actions.read_all(ITEM_NAMES)

    def item_prices(self) -> list[str]:
        if self.is_empty():
            return []
        return self.actions.read_all(ITEM_PRICES)

    def is_item_in_cart(self, name: str) -> bool:
        return name in self.item_names()

    def remove_item(self, name: str) -> None:
        self.actions.click(REMOVE_BUTTON_BY_NAME.format(name=name))
        self.actions.wait_until_gone(ITEM_BY_NAME.format(name=name))

    def remove_all_items(self) -> None:
        for name in self.item_names():
            self.remove_item(name)

    def continue_shopping(self) -> None:
        self.actions.click(CONTINUE_SHOPPING)

    def checkout(self) -> None:
        self.actions.click(CHECKOUT)

    def item_quantity(self, name: str) -> int:
        return int(self.actions.read(QUANTITY_BY_NAME.format(name=name)))

    def item_price(self, name: str) -> str:
        return self.actions.read(PRICE_BY_NAME.format(name=name))

    def is_continue_shopping_displayed(self) -> bool:
        return self.actions.is_displayed(CONTINUE_SHOPPING)

    def is_checkout_displayed(self) -> bool:
        return self.actions.is_displayed(CHECKOUT)
