from constants.known_brands import BRAND_DISPLAY_NAMES

__all__ = ["BRAND_DISPLAY_NAMES"]
