"""
Service layer abstraction.

``CatalogService`` owns the lifecycle of planets, people and films;
``AssociationService`` owns the person↔film links.  Services raise the
exceptions defined in ``core.errors`` and never deal with HTTP.
"""
