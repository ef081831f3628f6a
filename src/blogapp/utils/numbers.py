def add(a, b):
    """Return a + b. Pure: same inputs, same output, no side effects."""
    return a + b
