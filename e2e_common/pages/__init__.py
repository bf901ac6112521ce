"""Page objects."""

from e2e_common.pages.base_page import BasePage

__all__ = ["BasePage"]
