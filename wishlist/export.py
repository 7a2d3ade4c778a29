"""
Wishlist export to json, csv and txt.

Options (all booleans) choose the columns: ``keywords``, ``categories``,
``priorities``, ``maxPrices``, ``timestamps`` default to on and
``inactiveItems`` defaults to off. Given the same wishlist, options and
``now`` the output is byte-identical.
"""
import json
from collections import namedtuple

from django.utils import timezone

from campusmart.exceptions import InvalidArgument
from campusmart.money import display_price, format_price, price_number

DEFAULT_OPTIONS = {
    "keywords": True,
    "categories": True,
    "priorities": True,
    "maxPrices": True,
    "timestamps": True,
    "inactiveItems": False,
}

CONTENT_TYPES = {
    "json": "application/json",
    "csv": "text/csv",
    "txt": "text/plain",
}

ExportResult = namedtuple("ExportResult", "content content_type filename")


def _selected(wishlist, opts):
    if opts["inactiveItems"]:
        return list(wishlist)
    return [item for item in wishlist if item.get("is_active", True)]


def to_json(user, items, opts, now):
    rows = []
    for item in items:
        row = {}
        if opts["keywords"]:
            row["keyword"] = item["keyword"]
        if opts["categories"]:
            row["category"] = item["category"]
        if opts["priorities"]:
            row["priority"] = item["priority"]
        if opts["maxPrices"] and item.get("max_price") is not None:
            row["max_price"] = price_number(item["max_price"])
        if opts["timestamps"]:
            row["created_at"] = item["created_at"]
        row["is_active"] = item.get("is_active", True)
        rows.append(row)

    document = {
        "user": {"name": user.name, "email": user.email},
        "wishlist": rows,
        "export_date": now.isoformat(),
        "total_items": len(items),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def _quoted(value):
    return '"{}"'.format(str(value).replace('"', '""'))


def to_csv(user, items, opts, now):
    header = []
    if opts["keywords"]:
        header.append("Keyword")
    if opts["categories"]:
        header.append("Category")
    if opts["priorities"]:
        header.append("Priority")
    if opts["maxPrices"]:
        header.append("Max Price")
    if opts["timestamps"]:
        header.append("Created At")
    header.append("Active")

    lines = [",".join(header)]
    for item in items:
        row = []
        if opts["keywords"]:
            row.append(_quoted(item["keyword"]))
        if opts["categories"]:
            row.append(_quoted(item["category"]))
        if opts["priorities"]:
            row.append(_quoted(item["priority"]))
        if opts["maxPrices"]:
            max_price = item.get("max_price")
            row.append(format_price(max_price) if max_price is not None else "")
        if opts["timestamps"]:
            row.append(_quoted(item["created_at"]))
        row.append("true" if item.get("is_active", True) else "false")
        lines.append(",".join(row))
    return "\n".join(lines) + "\n"


def to_txt(user, items, opts, now):
    out = [
        f"My Wishlist - Exported on {now.date().isoformat()}",
        f"Total Items: {len(items)}",
        "",
    ]

    by_category = {}
    for item in items:
        by_category.setdefault(item["category"], []).append(item)

    for category, entries in by_category.items():
        out.append("")
        out.append(f"--- {category} ---")
        for item in entries:
            line = f"• {item['keyword']}"
            if opts["priorities"]:
                line += f" ({item['priority']})"
            if opts["maxPrices"] and item.get("max_price") is not None:
                line += f" - Max: {display_price(item['max_price'])}"
            if not item.get("is_active", True):
                line += " [INACTIVE]"
            out.append(line)
    return "\n".join(out) + "\n"


WRITERS = {"json": to_json, "csv": to_csv, "txt": to_txt}


def export_wishlist(user, fmt, options=None, now=None):
    if fmt not in WRITERS:
        raise InvalidArgument("Unsupported format. Use json, csv, or txt.")

    opts = {**DEFAULT_OPTIONS, **(options or {})}
    now = now or timezone.now()
    items = _selected(user.wishlist, opts)
    content = WRITERS[fmt](user, items, opts, now)
    filename = f"wishlist_{now.date().isoformat()}.{fmt}"
    return ExportResult(content, CONTENT_TYPES[fmt], filename)
