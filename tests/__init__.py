"""
Test suite for radixnum.

One module per component: number, parsing, bigint, arithmetic, rational,
formats and the shell.
"""
