"""Row identifier generator (CUID2)."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant identifier for a new row.

    Returns:
        A new CUID string.

    Raises:
        TypeError: If the generator returns something other than a string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(f"Expected str from cuid_generator, got {type(result).__name__}")
    return result
