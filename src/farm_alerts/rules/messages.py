"""Alert text templates.

Evaluators decide *whether* an alert fires and with what priority and
timing. The wording is delegated to an `AlertFormatter`, which fills a
template with the location name and the numbers behind the decision.
Swap the templates (or subclass the formatter) to localise the text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class AlertTemplate:
    """Templates for one alert type. Placeholders use str.format syntax."""

    icon: str
    title: str
    message: str
    action: str | None = None


@dataclass(frozen=True)
class AlertText:
    """Rendered text for one alert."""

    title: str
    message: str
    action: str | None


DEFAULT_TEMPLATES: dict[str, AlertTemplate] = {
    "long_rains_planting": AlertTemplate(
        icon="🌱",
        title="Long Rains Planting Season",
        message=(
            "This is the ideal time for planting maize, beans, and vegetables in "
            "{location}. The long rains provide excellent conditions for crop "
            "establishment."
        ),
        action="Prepare your fields and start planting",
    ),
    "short_rains_planting": AlertTemplate(
        icon="🌱",
        title="Short Rains Planting Season",
        message=(
            "Short rains season is here in {location}. Good time for planting "
            "quick-maturing crops like beans, peas, and vegetables."
        ),
        action="Start planting short-season crops",
    ),
    "long_rains_harvest": AlertTemplate(
        icon="🌾",
        title="Harvest Season Approaching",
        message=(
            "Long rains crops should be ready for harvest in {location}. Monitor "
            "maize moisture content and prepare storage facilities."
        ),
        action="Prepare harvesting equipment and storage",
    ),
    "short_rains_harvest": AlertTemplate(
        icon="🌾",
        title="Harvest Time",
        message=(
            "Short rains crops are ready for harvest in {location}. Ensure proper "
            "drying and storage to prevent post-harvest losses."
        ),
        action="Begin harvesting operations",
    ),
    "drought": AlertTemplate(
        icon="☀️",
        title="Drought Alert - Irrigation Needed",
        message=(
            "Low rainfall expected in {location} over the {days}-day forecast "
            "({total_mm:.1f}mm total). Your crops will need irrigation to survive."
        ),
        action="Prepare irrigation systems",
    ),
    "heavy_rain": AlertTemplate(
        icon="🌧️",
        title="Heavy Rain Warning",
        message=(
            "Heavy rainfall expected in {location} on {date} ({amount_mm:.1f}mm). "
            "Ensure proper drainage to prevent waterlogging."
        ),
        action="Check and clear drainage channels",
    ),
    "heat_stress": AlertTemplate(
        icon="🌡️",
        title="High Temperature Alert",
        message=(
            "Very high temperatures expected in {location} (up to {temp_c:.1f}°C). "
            "Increase watering frequency and provide shade for sensitive crops."
        ),
        action="Adjust irrigation schedule",
    ),
    "cold_stress": AlertTemplate(
        icon="❄️",
        title="Cold Weather Alert",
        message=(
            "Cold temperatures expected in {location} (down to {temp_c:.1f}°C). "
            "Protect sensitive crops from frost damage."
        ),
        action="Cover sensitive plants",
    ),
    "pest_risk": AlertTemplate(
        icon="🐛",
        title="Pest & Disease Risk",
        message=(
            "High humidity ({humidity:.0f}%) and moderate temperatures in "
            "{location} create favorable conditions for pests and diseases. "
            "Monitor your crops closely."
        ),
        action="Inspect crops and prepare pest control measures",
    ),
    "market_timing": AlertTemplate(
        icon="📊",
        title="Market Timing Advice",
        message=(
            "Harvest season in {location} may lead to lower prices due to "
            "increased supply. Consider storage or value addition to get better "
            "prices."
        ),
        action="Plan your marketing strategy",
    ),
    "provider_advisory": AlertTemplate(
        icon="⚠️",
        title="{event}",
        message="{summary}",
        action="Take necessary precautions",
    ),
}


class AlertFormatter:
    """Render alert text from templates.

    Example:
        ```python
        formatter = AlertFormatter(use_emoji=False)
        text = formatter.render("heat_stress", location="Nakuru", temp_c=38.0)
        text.title  # "High Temperature Alert"
        ```
    """

    def __init__(
        self,
        templates: Mapping[str, AlertTemplate] | None = None,
        use_emoji: bool = True,
    ):
        self.templates = dict(templates or DEFAULT_TEMPLATES)
        self.use_emoji = use_emoji

    def render(self, key: str, **context: Any) -> AlertText:
        """Render the template registered under key.

        Raises:
            KeyError: If no template is registered for key
        """
        template = self.templates[key]

        title = template.title.format(**context)
        if self.use_emoji and template.icon:
            title = f"{template.icon} {title}"

        action = template.action.format(**context) if template.action else None

        return AlertText(
            title=title,
            message=template.message.format(**context),
            action=action,
        )
