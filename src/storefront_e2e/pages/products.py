"""Page object for the product catalog."""

from __future__ import annotations

import enum
import logging
from typing import Optional

from ..models import Locator
from ..sync.conditions import text_contains
from .base import BasePage

LOGGER = logging.getLogger(__name__)

TITLE = Locator.by_class("title", "page title")
CART_LINK = Locator.by_class("shopping_cart_link", "cart link")
CART_BADGE = Locator.by_class("shopping_cart_badge", "cart badge")
MENU_BUTTON = Locator.by_id("react-burger-menu-btn", "menu button")
LOGOUT_LINK = Locator.by_id("logout_sidebar_link", "logout link")
SORT_DROPDOWN = Locator.by_class("product_sort_container", "sort dropdown")
PRODUCT_ITEMS = Locator.by_class("inventory_item", "product item")
PRODUCT_NAMES = Locator.by_class("inventory_item_name", "product name")
PRODUCT_PRICES = Locator.by_class("inventory_item_price", "product price")

_ITEM = "//div[text()='{name}']/ancestor::div[@class='inventory_item']"
PRODUCT_BY_NAME = Locator.xpath("//div[text()='{name}']", "product '{name}'")
ADD_BUTTON_BY_NAME = Locator.xpath(
    _ITEM + "//button[text()='Add to cart']", "add-to-cart button of '{name}'"
)
REMOVE_BUTTON_BY_NAME = Locator.xpath(
    _ITEM + "//button[text()='Remove']", "remove button of '{name}'"
)
PRICE_BY_NAME = Locator.xpath(
    _ITEM + "//div[@class='inventory_item_price']", "price of '{name}'"
)
BUTTON_BY_POSITION = Locator.xpath(
    "(//div[@class='inventory_item'])[{position}]//button", "button of product #{position}"
)


class SortOption(str, enum.Enum):
    """Values of the catalog sort dropdown."""

    NAME_ASC = "az"
    NAME_DESC = "za"
    PRICE_ASC = "lohi"
    PRICE_DESC = "hilo"


class ProductsPage(BasePage):
    """Inventory listing with cart badge, sorting and the side menu."""

    path = "/inventory.html"

    def is_loaded(self) -> bool:
        return self._holds(text_contains(TITLE, "Products"))

    def wait_until_loaded(self) -> None:
        self.actions.wait_until_visible(TITLE)
        self.actions.wait_until_text(TITLE, "Products")

    def title(self) -> str:
        return self.actions.read(TITLE)

    def product_count(self) -> int:
        return self.actions.count(PRODUCT_ITEMS)

    def add_product_to_cart(self, name: str) -> None:
        self.actions.click(ADD_BUTTON_BY_NAME.format(name=name))
        self.actions.wait_until_visible(REMOVE_BUTTON_BY_NAME.format(name=name))

    def add_product_to_cart_by_index(self, index: int) -> None:
        count = self.product_count()
        if not 0 <= index < count:
            raise IndexError(f"Product index {index} out of range for {count} products")
        button = BUTTON_BY_POSITION.format(position=index + 1)
        self.actions.click(button)
        self.actions.wait_until_text(button, "Remove", exact=True)

    def remove_product_from_cart(self, name: str) -> None:
        self.actions.click(REMOVE_BUTTON_BY_NAME.format(name=name))
        self.actions.wait_until_visible(ADD_BUTTON_BY_NAME.format(name=name))

    def open_product(self, name: str) -> None:
        self.actions.click(PRODUCT_BY_NAME.format(name=name))

    def cart_badge_count(self) -> int:
        if not self.actions.is_displayed(CART_BADGE):
            return 0
        return int(self.actions.read(CART_BADGE))

    def is_cart_badge_displayed(self) -> bool:
        return self.actions.is_displayed(CART_BADGE)

    def wait_for_cart_badge(self, count: int, timeout: Optional[float] = None) -> None:
        """Wait until the badge shows ``count``; a count of zero means no badge."""

        if count == 0:
            self.actions.wait_until_gone(CART_BADGE, timeout)
        else:
            self.actions.wait_until_text(CART_BADGE, str(count), timeout, exact=True)

    def open_cart(self) -> None:
        self.actions.click(CART_LINK)

    def sort_products(self, option: SortOption) -> None:
        option = SortOption(option)
        LOGGER.debug("Sorting products by %s", option.value)
        self.actions.select(SORT_DROPDOWN, option.value)
        self.actions.wait_until_page_ready()

    def product_names(self) -> list[str]:
        return self.actions.read_all(PRODUCT_NAMES)

    def product_prices(self) -> list[str]:
        return self.actions.read_all(PRODUCT_PRICES)

    def open_menu(self) -> None:
        self.actions.click(MENU_BUTTON)
        self.actions.wait_until_visible(LOGOUT_LINK, timeout=5)

    def logout(self) -> None:
        self.open_menu()
        self.actions.click(LOGOUT_LINK)

    def is_product_displayed(self, name: str) -> bool:
        return self.actions.is_displayed(PRODUCT_BY_NAME.format(name=name))

    def product_price(self, name: str) -> str:
        return self.actions.read(PRICE_BY_NAME.format(name=name))

