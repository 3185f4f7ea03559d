def normalize_path(path: str) -> str:
    """
    Drop '..' components together with the component before them.

    Purely textual: no filesystem access. A leading '..' (or one following
    another '..') has nothing to cancel and is kept as is.
    """
    parts: list[str] = []
    for component in path.split("/"):
        if component == ".." and parts and parts[-1] != "..":
            parts.pop()
        else:
            parts.append(component)
    return "/".join(parts)
