"""
Adapters layer - Shop data sources feeding the domain.
"""

from .yaml_shop_store import ShopDataFile, YamlShopStore

__all__ = ["ShopDataFile", "YamlShopStore"]
