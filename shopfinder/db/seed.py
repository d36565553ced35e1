from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

SEED_SHOPS: list[dict[str, Any]] = [
    {
        "name": "Monument Bank",
        "coordinates": {"x": 123, "y": 65, "z": 467},
        "rating": 4.5,
        "items": [
            {"name": "Diamond Sword", "price": 20},
            {"name": "Enchanted Book", "price": 8},
            {"name": "Repeater", "price": 2},
        ],
    },
    {
        "name": "Artificial Industries",
        "coordinates": {"x": 200, "y": 70, "z": 300},
        "rating": 4.0,
        "items": [
            {"name": "Redstone", "price": 1},
            {"name": "Repeater", "price": 5},
            {"name": "Piston", "price": 2},
        ],
    },
    {
        "name": "VEC Incorporated",
        "coordinates": {"x": 2020, "y": 74, "z": -3040},
        "rating": 2.5,
        "items": [
            {"name": "Blaze Rod", "price": 12.5},
            {"name": "Nether Wart", "price": 7},
        ],
    },
]


def write_seed_catalogue(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(SEED_SHOPS, indent=2), encoding="utf-8")


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("catalogue.json")
    write_seed_catalogue(target)
    print(f"Wrote {len(SEED_SHOPS)} shops to {target}")
