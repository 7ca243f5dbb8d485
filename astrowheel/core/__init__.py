"""Pure computational engines: angles, aspects and houses.

Submodules are imported explicitly by callers; this package keeps no
re-exports so :mod:`astrowheel.catalogs` can depend on
:mod:`astrowheel.core.angles` without import cycles.
"""
