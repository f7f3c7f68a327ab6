"""Localized names of the CCU's built-in rooms and functions.

The CCU stores its default rooms and functions under keys such as
'roomKitchen' or 'funcHeating'. The tables below map these keys to the
names shown in the WebUI.
"""


class Translation:
    """Lookup table between CCU name keys and localized display names."""

    language = ''
    translations: dict[str, str] = {}

    def translate(self, key: str) -> str:
        """Return the localized name for key, or key itself if unknown."""
        return self.translations.get(key.lower(), key)

    def inverse_translate(self, value: str) -> str:
        """Return the key whose localized name matches value, or value itself.

        The comparison ignores case and surrounding whitespace, so it works
        on names that were already normalised for a name lookup.
        """
        needle = value.strip().lower()
        for key, translated in self.translations.items():
            if translated.lower() == needle:
                return key
        return value


class EnglishTranslation(Translation):
    language = 'en'
    translations = {
        'roombathroom': 'Bathroom',
        'roombedroom': 'Bedroom',
        'roomkitchen': 'Kitchen',
        'roomlivingroom': 'Living room',
        'funcbutton': 'Button',
        'funccentral': 'Central',
        'funcclimatecontrol': 'Climate control',
        'funcenergy': 'Energy',
        'funcheating': 'Heating',
        'funclock': 'Lock',
        'funcsecurity': 'Security',
        'funcweather': 'Weather',
    }


class GermanTranslation(Translation):
    language = 'de'
    translations = {
        'roombathroom': 'Badezimmer',
        'roombedroom': 'Schlafzimmer',
        'roomkitchen': 'Küche',
        'roomlivingroom': 'Wohnzimmer',
        'funcbutton': 'Taster',
        'funccentral': 'Zentrale',
        'funcclimatecontrol': 'Klima',
        'funcenergy': 'Energiemanagement',
        'funcheating': 'Heizung',
        'funclock': 'Verschluss',
        'funcsecurity': 'Sicherheit',
        'funcweather': 'Wetter',
    }


TRANSLATIONS = {
    'en': EnglishTranslation,
    'de': GermanTranslation,
}


def get_translation(language: str) -> Translation:
    """Create the translation for a language code, defaulting to English."""
    return TRANSLATIONS.get(language.lower(), EnglishTranslation)()
