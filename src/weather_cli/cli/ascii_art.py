"""ASCII glyphs keyed by OpenWeather condition id."""

from __future__ import annotations

WEATHER_ASCII_ART: dict[int, str] = {
    # Clear sky
    800: r"""
    \   /
     .-.
  ― (   ) ―
     '-'
    /   \
""",
    # Few clouds
    801: r"""
   \  /
 _ /"".-.
   \_(   ).
   /(___(__)
""",
    # Scattered clouds
    802: r"""
     .--.
  .-(    ).
 (___.__)__)
""",
    # Broken clouds
    803: r"""
     .--.
  .-(    ).
 (___.__)__)
     *   *
""",
    # Shower rain
    500: r"""
     .-.
    (   ).
   (___(__)
    ' ' ' '
   ' ' ' '
""",
    # Rain
    501: r"""
     .-.
    (   ).
   (___(__)
  ‚'‚'‚'‚'
 ‚'‚'‚'‚'
""",
    # Thunderstorm
    200: r"""
     .-.
    (   ).
   (___(__)
  ⚡''⚡''
 '⚡''⚡'
""",
    # Snow
    600: r"""
     .-.
    (   ).
   (___(__)
    *  *  *
   *  *  *
""",
    # Mist
    701: r"""
 _ - _ - _ -
  _ - _ - _
 _ - _ - _ -
""",
}

UNKNOWN_ASCII_ART: str = r"""
   ?????
  ?     ?
 ?       ?
  ?     ?
   ?????

 Sorry. This ASCII art is not ready yet.
"""


def get_weather_ascii(condition_code: int) -> str:
    """Return the glyph for *condition_code*, or a placeholder."""
    return WEATHER_ASCII_ART.get(condition_code, UNKNOWN_ASCII_ART)
