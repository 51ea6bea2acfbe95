"""
Core matrix type, numerical primitives, configuration and contracts.

Everything here is independent of I/O: no files, network or environment
are touched except the random source used by Matrix.randomize().
"""
