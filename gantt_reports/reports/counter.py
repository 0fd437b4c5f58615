from .indexer import EntityIndex, resolve_identifier

TOTAL_COLUMN = "All"


def counter_header(index: EntityIndex) -> list[str]:
    return ["Name", "ID"] + index.sorted_categories() + [TOTAL_COLUMN]


def count_occurrences(index: EntityIndex, name: str) -> list[int]:
    """Hits of one entity per category, in sorted category order, then the total"""
    counts = [index.category_hits[category][name] for category in index.sorted_categories()]
    return counts + [sum(counts)]


def build_counter_rows(index: EntityIndex, id_map: dict[str, str]) -> list[list]:
    return [
        [name, resolve_identifier(id_map, name)] + count_occurrences(index, name)
        for name in index.names
    ]
