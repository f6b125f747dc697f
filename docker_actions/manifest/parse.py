def parse_tags(tags: str) -> list[str]:
    """Split a comma-separated tag list and trim each entry.

    Empty entries are kept so that a malformed list surfaces as a failed reference rather than silently
    disappearing.

    :param tags: Comma-separated tags, e.g. `1.0.0,latest`.

    :return: The trimmed tags in input order.
    """
    return [tag.strip() for tag in tags.split(",")]


def parse_sources(sources: str) -> list[str]:
    """Split a newline-separated source list, trimming each line and dropping blank ones.

    :param sources: Newline-separated image references, e.g. `org/image@sha256:...`.

    :return: The non-empty, trimmed sources in input order.
    """
    parsed = []
    for line in sources.split("\n"):
        line = line.strip()
        if not line:
            continue
        parsed.append(line)
    return parsed


def manifest_reference(image_name: str, tag: str) -> str:
    """Join an image name and a tag into a tag reference."""
    return f"{image_name}:{tag}"
