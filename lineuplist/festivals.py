from typing import List, Optional

from .models import Festival, Region

REGIONS = [
    Region(name="aus", display_name="Australia"),
    Region(name="can", display_name="Canada"),
    Region(name="eu", display_name="Europe"),
    Region(name="usa", display_name="United States"),
]

SUPPORTED_FESTIVALS = [
    Festival(name="Coachella", display_name="Coachella", region="usa", years=(2022, 2023, 2024)),
    Festival(name="Bonnaroo", display_name="Bonnaroo", region="usa", years=(2022, 2023, 2024)),
    Festival(name="Lollapalooza", display_name="Lollapalooza", region="usa", years=(2023, 2024)),
    Festival(name="GovBall", display_name="Governors Ball", region="usa", years=(2023, 2024)),
    Festival(name="OutsideLands", display_name="Outside Lands", region="usa", years=(2023, 2024)),
    Festival(name="EDCLV", display_name="EDC Las Vegas", region="usa", years=(2023, 2024)),
    Festival(name="Osheaga", display_name="Osheaga", region="can", years=(2023, 2024)),
    Festival(name="Primavera", display_name="Primavera Sound", region="eu", years=(2023, 2024)),
    Festival(name="Glastonbury", display_name="Glastonbury", region="eu", years=(2023, 2024)),
    Festival(name="Splendour", display_name="Splendour in the Grass", region="aus", years=(2024,)),
]

# Genres broad enough to get their own checkbox group on the customize page.
MAIN_GENRES = [
    "alternative",
    "blues",
    "country",
    "dance",
    "drum and bass",
    "dubstep",
    "edm",
    "electronic",
    "emo",
    "folk",
    "funk",
    "hip hop",
    "house",
    "indie",
    "jazz",
    "latin",
    "metal",
    "pop",
    "punk",
    "r&b",
    "rap",
    "reggae",
    "rock",
    "soul",
    "techno",
    "trance",
    "trap",
]


def find_edition(name: str, year: int, festivals: List[Festival] = None) -> Optional[Festival]:
    """Festival called `name` that has a lineup for `year`, if we support it."""
    for festival in festivals if festivals is not None else SUPPORTED_FESTIVALS:
        if festival.name and festival.name == name and year in festival.years:
            return festival
    return None


def list_for_dropdown(festivals: List[Festival] = None, regions: List[Region] = None) -> List[Festival]:
    """Festivals sorted by region, each region headed by a disabled separator entry."""
    festivals = list(festivals if festivals is not None else SUPPORTED_FESTIVALS)
    regions = regions if regions is not None else REGIONS

    region_codes = {festival.region for festival in festivals}
    entries = list(festivals)
    for region in regions:
        if region.name in region_codes:
            entries.append(Festival(name="", display_name=region.display_name, region=region.name))

    # "" < any real name, so each separator lands first in its region
    entries.sort(key=lambda f: (f.region, f.name))
    return entries


def is_main_genre(genre: str) -> bool:
    return genre in MAIN_GENRES
