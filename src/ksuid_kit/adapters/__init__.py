"""
Adapters - thin bindings between Ksuid and outside frameworks

Each adapter only routes values through the kernel's parse/from_bytes and
str/bytes projections.
"""
