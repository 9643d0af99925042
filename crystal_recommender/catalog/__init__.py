"""
Crystal catalog: read-only store and JSON loaders.

Modules
-------
store  : CatalogStore + PreferenceTables.
loader : load_catalog(), load_preference_tables(), validate_preference_tables().
"""
