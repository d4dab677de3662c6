"""Wiki category catalogue: ids, titles, descriptions, suggested subcategories."""

WIKI_CATEGORIES = [
    {
        "id": "characters",
        "title": "Characters",
        "description": "Information about all playable and non-playable characters in the game.",
        "subcategories": ["Protagonists", "Antagonists", "Side Characters", "Faction Leaders"],
    },
    {
        "id": "missions",
        "title": "Missions",
        "description": "Walkthroughs and guides for all main and side missions in the game.",
        "subcategories": ["Main Story", "Side Missions", "Strangers", "Heists"],
    },
    {
        "id": "locations",
        "title": "Locations",
        "description": "Detailed information about all locations in Vice City and Leonida.",
        "subcategories": ["Vice City", "Leonida", "Landmarks", "Hidden Areas"],
    },
    {
        "id": "vehicles",
        "title": "Vehicles",
        "description": "Stats and information about all vehicles available in the game.",
        "subcategories": ["Cars", "Motorcycles", "Aircraft", "Boats", "Special Vehicles"],
    },
    {
        "id": "weapons",
        "title": "Weapons",
        "description": "Details about all weapons and combat mechanics in the game.",
        "subcategories": ["Handguns", "Shotguns", "Assault Rifles", "Sniper Rifles", "Explosives", "Melee"],
    },
    {
        "id": "activities",
        "title": "Activities",
        "description": "Guides for all side activities and mini-games.",
        "subcategories": ["Sports", "Gambling", "Nightlife", "Business", "Collectibles"],
    },
    {
        "id": "collectibles",
        "title": "Collectibles",
        "description": "Locations and guides for all collectible items.",
        "subcategories": ["Stashes", "Hidden Packages", "Unique Items", "Achievements"],
    },
    {
        "id": "gameplay-mechanics",
        "title": "Gameplay Mechanics",
        "description": "Detailed guides on core gameplay systems and mechanics.",
        "subcategories": ["Character Skills", "Combat", "Economy", "Wanted System", "Stealth"],
    },
    {
        "id": "updates",
        "title": "Updates",
        "description": "Information about game updates, patches, and DLC content.",
        "subcategories": ["Major Updates", "Patch Notes", "DLC", "Hotfixes"],
    },
    {
        "id": "gangs",
        "title": "Gangs",
        "description": "Information about criminal organizations and gangs.",
        "subcategories": ["Vice City Gangs", "Leonida Gangs", "Cartels", "Street Gangs"],
    },
    {
        "id": "media",
        "title": "Media",
        "description": "In-game media: radio stations, TV shows, and internet.",
        "subcategories": ["Radio Stations", "TV Shows", "Internet", "Advertisements"],
    },
    {
        "id": "misc",
        "title": "Misc",
        "description": "Miscellaneous information that doesn't fit in other categories.",
        "subcategories": ["Easter Eggs", "References", "Cheats", "Glitches"],
    },
]

CATEGORY_CHOICES = [(category["id"], category["title"]) for category in WIKI_CATEGORIES]
