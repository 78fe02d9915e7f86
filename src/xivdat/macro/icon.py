"""
Macro Icons
===========

Lookup table between macro icons and the raw values stored in the Key (K)
and Icon (I) sections of a macro.

Only the icons selectable from the macro GUI are listed. Icons configured
with the `/micon <action>` command are not stored in these sections; the
game keeps the GUI choice alongside them.

Each MacroIcon value is its (key, id) pair:
- key: 3 hex digits, the icon's row in the GUI table
- id: 7 hex digits, the icon id

The pair ("000", "0000000") is NO_ICON, used by undefined macros. The GUI
does not allow choosing it, but the game accepts it.

Copyright (c) 2026 xivdat Contributors
"""

from enum import Enum
from typing import Optional


class MacroIcon(Enum):
    """Default macro icons, valued by their (key, id) section contents."""
    NO_ICON = ("000", "0000000")
    DEFAULT_ICON = ("001", "00101D1")

    # Role symbols
    DPS1 = ("002", "0010235")
    DPS2 = ("003", "0010236")
    DPS3 = ("004", "0010237")
    TANK1 = ("005", "0010249")
    TANK2 = ("006", "001024A")
    TANK3 = ("007", "001024B")
    HEALER1 = ("008", "001025D")
    HEALER2 = ("009", "001025E")
    HEALER3 = ("00A", "001025F")

    # Crafter symbols
    CRAFTER_PURPLE1 = ("00B", "00101E5")
    CRAFTER_PURPLE2 = ("00C", "00101E6")
    CRAFTER_PURPLE3 = ("00D", "00101E7")
    CRAFTER_YELLOW1 = ("00E", "00101F9")
    CRAFTER_YELLOW2 = ("00F", "00101FA")
    CRAFTER_YELLOW3 = ("010", "00101FB")
    CRAFTER_GREEN1 = ("011", "001020D")
    CRAFTER_GREEN2 = ("012", "001020E")
    CRAFTER_GREEN3 = ("013", "001020F")

    # Items with gold border
    ITEM_HAMMER = ("014", "00005E9")
    ITEM_SWORD = ("015", "000061B")
    ITEM_SHIELD = ("016", "000064D")
    ITEM_RING = ("017", "000067E")
    ITEM_SHOES = ("018", "00006B1")
    ITEM_HAT = ("019", "00006E2")
    ITEM_BOTTLE = ("01A", "0000715")
    ITEM_BREAD = ("01B", "0000746")

    # Gatherer symbols
    GATHERER1 = ("01C", "0010221")
    GATHERER2 = ("01D", "0010222")
    GATHERER3 = ("01E", "0010223")

    # Gold numbers on blue
    NUMBER0 = ("01F", "0010271")
    NUMBER1 = ("020", "0010272")
    NUMBER2 = ("021", "0010273")
    NUMBER3 = ("022", "0010274")
    NUMBER4 = ("023", "0010275")
    NUMBER5 = ("024", "0010276")
    NUMBER6 = ("025", "0010277")
    NUMBER7 = ("026", "0010278")
    NUMBER8 = ("027", "0010279")
    NUMBER9 = ("028", "001027A")
    NUMBER10 = ("029", "001027B")

    # Blue numbers on gold
    INVERSE_NUMBER0 = ("02A", "0010285")
    INVERSE_NUMBER1 = ("02B", "0010286")
    INVERSE_NUMBER2 = ("02C", "0010287")
    INVERSE_NUMBER3 = ("02D", "0010288")
    INVERSE_NUMBER4 = ("02E", "0010289")
    INVERSE_NUMBER5 = ("02F", "001028A")
    INVERSE_NUMBER6 = ("030", "001028B")
    INVERSE_NUMBER7 = ("031", "001028C")
    INVERSE_NUMBER8 = ("032", "001028D")
    INVERSE_NUMBER9 = ("033", "001028E")
    INVERSE_NUMBER10 = ("034", "001028F")

    # Gray symbols
    SYMBOL_ARROW_LEFT = ("035", "00102FD")
    SYMBOL_ARROW_RIGHT = ("036", "00102FE")
    SYMBOL_ARROW_UP = ("037", "00102FF")
    SYMBOL_ARROW_DOWN = ("038", "0010300")
    SYMBOL_CIRCLE = ("039", "0010301")
    SYMBOL_TRIANGLE = ("03A", "0010302")
    SYMBOL_SQUARE = ("03B", "0010303")
    SYMBOL_X = ("03C", "0010304")
    SYMBOL_NO = ("03D", "0010305")
    SYMBOL_WARNING = ("03E", "0010306")
    SYMBOL_CHECK = ("03F", "0010307")
    SYMBOL_STAR = ("040", "0010308")
    SYMBOL_QUESTION = ("041", "0010309")
    SYMBOL_EXCLAMATION = ("042", "001030A")
    SYMBOL_PLUS = ("043", "001030B")
    SYMBOL_MINUS = ("044", "001030C")
    SYMBOL_CLOCK = ("045", "001030D")
    SYMBOL_BULB = ("046", "001030E")
    SYMBOL_COG = ("047", "001030F")
    SYMBOL_SEARCH = ("048", "0010310")
    SYMBOL_SPEECH = ("049", "0010311")
    SYMBOL_HEART = ("04A", "0010312")
    SYMBOL_SPADE = ("04B", "0010313")
    SYMBOL_CLUB = ("04C", "0010314")
    SYMBOL_DIAMOND = ("04D", "0010315")
    SYMBOL_DICE = ("04E", "0010316")

    # Crystals
    CRYSTAL_FIRE = ("04F", "0004E27")
    CRYSTAL_ICE = ("050", "0004E29")
    CRYSTAL_WIND = ("051", "0004E2A")
    CRYSTAL_EARTH = ("052", "0004E2C")
    CRYSTAL_LIGHTNING = ("053", "0004E2B")
    CRYSTAL_WATER = ("054", "0004E28")

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def id(self) -> str:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> "MacroIcon":
        """
        Look up an icon by name, case-insensitively.

        Accepts "SymbolCircle", "symbol_circle" or "SYMBOL-CIRCLE".

        Raises:
            KeyError: If no icon has that name
        """
        normalized = name.replace("-", "_").upper()
        if normalized in cls.__members__:
            return cls[normalized]
        squashed = normalized.replace("_", "")
        for member_name, member in cls.__members__.items():
            if member_name.replace("_", "") == squashed:
                return member
        raise KeyError(name)


def icon_to_key_and_id(icon: MacroIcon) -> tuple[str, str]:
    """
    Get the key and id section contents for an icon.

    Example:
        >>> icon_to_key_and_id(MacroIcon.ITEM_HAMMER)
        ('014', '00005E9')
    """
    return icon.value


def icon_from_key_and_id(key: str, icon_id: str) -> Optional[MacroIcon]:
    """
    Get the icon for raw key and id section contents.

    Returns None only if the pair is not registered. ("000", "0000000")
    is valid and returns NO_ICON.

    Example:
        >>> icon_from_key_and_id("014", "00005E9")
        <MacroIcon.ITEM_HAMMER: ('014', '00005E9')>
    """
    try:
        return MacroIcon((key, icon_id))
    except ValueError:
        return None
