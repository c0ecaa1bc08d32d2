"""
Default sections offered when a menu is created for a restaurant type.
"""

from typing import NamedTuple


class SectionPreset(NamedTuple):
    name: str
    description: str | None
    icon: str | None
    display_order: int


def _presets(*rows: tuple[str, str | None, str | None]) -> list[SectionPreset]:
    return [SectionPreset(name, description, icon, order) for order, (name, description, icon) in enumerate(rows, start=1)]


SECTION_PRESETS: dict[str, list[SectionPreset]] = {
    "ristorante": _presets(
        ("Antipasti", "Per iniziare", "appetizer"),
        ("Primi Piatti", "Pasta, risotti e zuppe", "pasta"),
        ("Secondi Piatti", "Carne e pesce", "main-course"),
        ("Contorni", "Verdure e insalate", "salad"),
        ("Dolci", "Dessert e pasticceria", "dessert"),
        ("Bevande", "Birre e bibite commerciali", "drink"),
        ("Birre Artigianali", "Selezione di birre artigianali", "beer"),
        ("Vini", "Sezione dedicata ai vini", "wine"),
    ),
    "pizzeria": _presets(
        ("Antipasti", "Sfizi e stuzzichini", "appetizer"),
        ("Pizze Rosse", "Con pomodoro", "pizza"),
        ("Pizze Bianche", "Senza pomodoro", "pizza"),
        ("Pizze Speciali", "Le nostre creazioni", "pizza"),
        ("Focacce e Calzoni", None, "bread"),
        ("Dolci", "Dessert della casa", "dessert"),
        ("Bevande", "Bibite e birre", "drink"),
    ),
    "pizzeria_ristorante": _presets(
        ("Antipasti", "Per iniziare", "appetizer"),
        ("Primi Piatti", "Pasta e risotti", "pasta"),
        ("Pizze", "Cotte nel forno a legna", "pizza"),
        ("Secondi Piatti", "Carne e pesce", "main-course"),
        ("Contorni", "Verdure fresche", "salad"),
        ("Dolci", "Dessert", "dessert"),
        ("Bevande", "Vini e bibite", "drink"),
    ),
    "trattoria": _presets(
        ("Antipasti", "Antipasti della casa", "appetizer"),
        ("Primi Piatti", "Paste fatte in casa", "pasta"),
        ("Secondi Piatti", "Piatti tradizionali", "main-course"),
        ("Contorni", None, "salad"),
        ("Dolci", "Dolci della nonna", "dessert"),
        ("Vini", "Vini della cantina", "wine"),
    ),
    "osteria": _presets(
        ("Antipasti", None, "appetizer"),
        ("Primi", "Paste e zuppe", "pasta"),
        ("Secondi", "Piatti del territorio", "main-course"),
        ("Formaggi e Salumi", None, "cheese"),
        ("Dolci", None, "dessert"),
        ("Vini", None, "wine"),
    ),
    "pub": _presets(
        ("Antipasti", "Finger food e starters", "appetizer"),
        ("Hamburger", "I nostri burger artigianali", "burger"),
        ("Panini e Toast", "Piatti caldi", "sandwich"),
        ("Insalate", "Fresche e gustose", "salad"),
        ("Fritture", None, "fries"),
        ("Birre alla Spina", "Dal nostro barile", "beer"),
        ("Birre in Bottiglia", "Selezione internazionale", "beer"),
        ("Cocktail", "Mixology", "cocktail"),
    ),
    "bar": _presets(
        ("Caffetteria", "Caffè e cappuccini", "coffee"),
        ("Colazione", "Brioche e dolci", "breakfast"),
        ("Aperitivi", "Cocktail e stuzzichini", "cocktail"),
        ("Panini e Toast", "Piatti veloci", "sandwich"),
        ("Bibite", "Analcoliche e alcoliche", "drink"),
    ),
    "caffe": _presets(
        ("Caffetteria", "Espresso, cappuccino, americano", "coffee"),
        ("Colazione", "Brioche, cornetti, dolci", "breakfast"),
        ("Bevande Fredde", "Frappè, smoothies, granite", "drink"),
        ("Snack", "Panini e tramezzini", "sandwich"),
    ),
    "enoteca": _presets(
        ("Vini al Calice", "Selezione del giorno", "wine"),
        ("Vini in Bottiglia", "La nostra cantina", "wine"),
        ("Taglieri", "Salumi e formaggi", "cheese"),
        ("Antipasti", None, "appetizer"),
        ("Primi Piatti", None, "pasta"),
        ("Secondi Piatti", None, "main-course"),
    ),
    "bistrot": _presets(
        ("Entrées", "Antipasti", "appetizer"),
        ("Plats", "Piatti principali", "main-course"),
        ("Salades", "Insalate", "salad"),
        ("Desserts", None, "dessert"),
        ("Vins et Boissons", "Vini e bevande", "wine"),
    ),
    "tavola_calda": _presets(
        ("Primi Piatti", "Paste e riso", "pasta"),
        ("Secondi Piatti", "Carne e pesce", "main-course"),
        ("Contorni", None, "salad"),
        ("Panini", None, "sandwich"),
        ("Bibite", None, "drink"),
    ),
    "rosticceria": _presets(
        ("Pollo e Carne", "Specialità alla griglia", "chicken"),
        ("Friggitoria", "Fritti e panzerotti", "fries"),
        ("Primi Piatti", None, "pasta"),
        ("Contorni", None, "salad"),
        ("Bibite", None, "drink"),
    ),
    "pasticceria": _presets(
        ("Pasticceria Secca", "Biscotti e frollini", "cookie"),
        ("Torte da Forno", "Classiche e moderne", "cake"),
        ("Torte su Ordinazione", "Per eventi speciali", "cake"),
        ("Pasticcini Mignon", "Piccole delizie", "dessert"),
        ("Caffetteria", "Per accompagnare", "coffee"),
    ),
    "gelateria": _presets(
        ("Gelati Classici", "Gusti tradizionali", "ice-cream"),
        ("Gelati Speciali", "Creazioni uniche", "ice-cream"),
        ("Sorbetti", "Senza latte", "ice-cream"),
        ("Coppe e Semifreddi", "Per tutti i gusti", "dessert"),
        ("Granite", "Freschezza siciliana", "drink"),
    ),
}


def get_section_presets(restaurant_type: str) -> list[SectionPreset]:
    """Presets for a restaurant type; unknown types have none."""
    return list(SECTION_PRESETS.get(restaurant_type, []))
