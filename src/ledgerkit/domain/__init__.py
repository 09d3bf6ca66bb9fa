"""Domain layer for ledgerkit application.

Services are imported from their modules (``ledgerkit.domain.mover`` etc.);
the database layer imports entities from this package, so nothing is
re-exported here.
"""
