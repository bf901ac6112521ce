"""Browser runtime."""

from e2e_common.runtime.browser import launch_page

__all__ = ["launch_page"]
