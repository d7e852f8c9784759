class CursorMovedError(RuntimeError):
    """Raised when a `Lazy` is used after its elements were handed to another one.

    Chaining a method such as `map` or `sort` moves the underlying iterator into the returned `Lazy`.
    From then on, only the returned `Lazy` may be pulled from.
    """
