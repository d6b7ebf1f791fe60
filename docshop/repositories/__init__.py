"""
Persistence adapters.

The dataset is a single JSON document; services reach it only through
JsonStore (load/save/transaction) and never touch the file directly.
"""
