"""Rule fragments shared by the historical and current-conditions classifiers."""

from models.snow import Confidence, Reason, ReasonCode, SnowType
from models.weather import SnowpackThresholds

RuleResult = tuple[SnowType, Confidence, list[Reason]]


def format_param(value: float | int | None) -> str:
    """Render a reason parameter as a locale-neutral string."""
    if value is None:
        return ""
    if isinstance(value, int):
        return str(value)
    return f"{value:.1f}"


def reason(code: ReasonCode, **params: float | int | None) -> Reason:
    """Build a Reason with stringified parameters."""
    return Reason(
        code=code, params={key: format_param(value) for key, value in params.items()}
    )


def new_snow_type(is_moist: bool) -> SnowType:
    return SnowType.MOIST_NEW_FALLEN if is_moist else SnowType.NEW_FALLEN


def fine_grained_type(is_moist: bool) -> SnowType:
    return SnowType.MOIST_FINE_GRAINED if is_moist else SnowType.FINE_GRAINED


def dry_aging(
    days_since_snow: int,
    is_moist: bool,
    avg_temp_celsius: float,
    thresholds: SnowpackThresholds,
) -> RuleResult:
    """Classify a dry surface by how many calendar days old the snow is.

    Up to the new-snow window the surface is still new-fallen, up to the
    fine-grained limit it is fine-grained, and after that it is old-grained
    (or transformed when it stays moist).
    """
    is_cold = avg_temp_celsius <= thresholds.cold_snow_boundary_celsius

    if days_since_snow <= thresholds.new_snow_window_days:
        return (
            new_snow_type(is_moist),
            Confidence.MEDIUM,
            [reason(ReasonCode.NEW_SNOW_RECENT, days=days_since_snow)],
        )

    if days_since_snow <= thresholds.fine_grained_max_days:
        if is_cold:
            return (
                SnowType.FINE_GRAINED,
                Confidence.HIGH,
                [
                    reason(
                        ReasonCode.FINE_GRAINED_COLD,
                        days=days_since_snow,
                        temperature=avg_temp_celsius,
                    )
                ],
            )
        if is_moist:
            return (
                SnowType.MOIST_FINE_GRAINED,
                Confidence.MEDIUM,
                [reason(ReasonCode.FINE_GRAINED_MOIST, days=days_since_snow)],
            )
        return (
            SnowType.FINE_GRAINED,
            Confidence.MEDIUM,
            [reason(ReasonCode.FINE_GRAINED_AGING, days=days_since_snow)],
        )

    if is_moist:
        return (
            SnowType.TRANSFORMED_MOIST_FINE,
            Confidence.MEDIUM,
            [reason(ReasonCode.OLD_GRAINED_MOIST, days=days_since_snow)],
        )

    confident = is_cold or days_since_snow >= thresholds.old_snow_confident_days
    return (
        SnowType.OLD_GRAINED,
        Confidence.HIGH if confident else Confidence.MEDIUM,
        [reason(ReasonCode.OLD_GRAINED, days=days_since_snow)],
    )
