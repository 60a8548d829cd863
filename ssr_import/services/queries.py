from __future__ import annotations

"""Example look-ups against the ``ssr_sections`` table, printed after a
database import (``--print-queries``)."""

SAMPLE_QUERIES: tuple[tuple[str, str], ...] = (
    (
        "Rate for CI/DI pipe laying, 300mm diameter (item 8a)",
        "SELECT i FROM ssr_sections, jsonb_array_elements(items) AS i\n"
        " WHERE item_key = '8a' AND i->>'dimension' = '300';",
    ),
    (
        "All sections in a category",
        "SELECT item_no, title FROM ssr_sections WHERE category = 'Pipe Jointing';",
    ),
    (
        "All rates for stoneware pipe laying (item 15)",
        "SELECT title, items FROM ssr_sections WHERE item_key = '15';",
    ),
    (
        "Sections with a direct item rate above 100",
        "SELECT DISTINCT s.item_no, s.title FROM ssr_sections s, jsonb_array_elements(s.items) AS i\n"
        " WHERE i->>'rate_type' = 'numeric' AND (i->>'rate')::numeric > 100;",
    ),
    (
        "Full text search",
        "SELECT item_no, title FROM ssr_sections\n"
        " WHERE to_tsvector('simple', search_text) @@ plainto_tsquery('simple', 'air valve');",
    ),
    (
        "GI pipe rate for 50mm diameter (item 12, G.I. pipes table)",
        "SELECT i FROM ssr_sections, jsonb_array_elements(sub_sections) AS sub,\n"
        "       jsonb_array_elements(sub->'items') AS i\n"
        " WHERE item_key = '12' AND sub->>'description' ILIKE 'G.I. PIPES%' AND i->>'dimension' = '50';",
    ),
    (
        "All categories",
        "SELECT DISTINCT category FROM ssr_sections ORDER BY 1;",
    ),
    (
        "All sections for year 2005-06",
        "SELECT item_no, title FROM ssr_sections WHERE metadata->>'year' = '2005-06';",
    ),
)


def render_sample_queries() -> str:
    lines = []
    for n, (label, sql) in enumerate(SAMPLE_QUERIES, start=1):
        lines.append(f"-- {n}. {label}")
        lines.append(sql)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
