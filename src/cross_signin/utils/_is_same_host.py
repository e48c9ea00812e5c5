def is_same_host(host: str, pattern: str) -> bool:
    host = host.lower()
    pattern = pattern.lower()

    if pattern.startswith("*."):
        return host.endswith(pattern[1:])

    return host == pattern
