# Services package init
"""
Catalog API — Services Layer
==============================

Service Inventory:
    - DocumentService: list / get / create / partial-update / delete for one
      collection. Two instances: item_service and article_service.
"""
