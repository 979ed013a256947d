"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

import re
from dataclasses import dataclass, field

from event_selector.core.filters import (
    ByCost,
    ByDateRange,
    ByLocation,
    ByMaxAttendees,
    FilterCriterion,
)


STORE_BACKENDS = ("memory", "firestore")

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class FirestoreSettings:
    """Firestore connection and collection names.

    Attributes:
        project_id: GCP project ID (None for default)
        database: Firestore database name (None for default database)
        events_collection: Collection holding event documents
        follows_collection: Collection holding follow edges
        attendance_collection: Collection holding attendance records
    """
    project_id: str | None = None
    database: str | None = None
    events_collection: str = "events"
    follows_collection: str = "user_followers"
    attendance_collection: str = "event_attendees"


@dataclass
class FilterPreset:
    """A named, reusable list of filter criteria.

    Attributes:
        name: Preset identifier
        criteria: Criteria applied when the preset is selected
    """
    name: str
    criteria: list[FilterCriterion] = field(default_factory=list)


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        store: Record store backend ("memory" or "firestore")
        seed_path: YAML fixture loaded into the memory store
        catalog_size_warning: Log a warning above this many events (0 = never)
        ignore_unknown_criteria: Let unrecognized criteria pass
        firestore: Firestore settings
        filter_presets: Named criteria lists
    """
    store: str = "memory"
    seed_path: str | None = None
    catalog_size_warning: int = 10000
    ignore_unknown_criteria: bool = False
    firestore: FirestoreSettings = field(default_factory=FirestoreSettings)
    filter_presets: list[FilterPreset] = field(default_factory=list)

    def get_preset(self, name: str) -> FilterPreset | None:
        """Find a preset by name."""
        for preset in self.filter_presets:
            if preset.name == name:
                return preset
        return None


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_criterion(criterion: FilterCriterion, field_name: str) -> list[ValidationError]:
    """Validate the thresholds of a single criterion.

    Pure function. The selection engine accepts any value; this is where
    negative thresholds and odd dates get reported.

    Args:
        criterion: Criterion to validate
        field_name: Name of the field for error messages

    Returns:
        List of validation errors/warnings (empty if valid)
    """
    errors = []

    if isinstance(criterion, ByLocation):
        errors.extend(validate_coordinates(
            criterion.latitude, criterion.longitude, field_name,
        ))
        if criterion.radius_km < 0:
            errors.append(ValidationError(
                field=f"{field_name}.radius_km",
                message=f"Radius must not be negative, got {criterion.radius_km}",
            ))

    elif isinstance(criterion, ByCost):
        if criterion.max_cost < 0:
            errors.append(ValidationError(
                field=f"{field_name}.max_cost",
                message=f"Max cost must not be negative, got {criterion.max_cost}",
            ))

    elif isinstance(criterion, ByMaxAttendees):
        if criterion.max_attendees < 0:
            errors.append(ValidationError(
                field=f"{field_name}.max_attendees",
                message=f"Max attendees must not be negative, got {criterion.max_attendees}",
            ))

    elif isinstance(criterion, ByDateRange):
        for name, value in (("start_date", criterion.start_date), ("end_date", criterion.end_date)):
            if not ISO_DATE_PATTERN.match(value):
                errors.append(ValidationError(
                    field=f"{field_name}.{name}",
                    message=f"Date '{value}' is not YYYY-MM-DD; it will compare as text",
                    severity="warning",
                ))
        if criterion.start_date > criterion.end_date:
            errors.append(ValidationError(
                field=field_name,
                message=(
                    f"start_date ({criterion.start_date}) > end_date "
                    f"({criterion.end_date}); range matches nothing"
                ),
                severity="warning",
            ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if config.store not in STORE_BACKENDS:
        errors.append(ValidationError(
            field="store",
            message=f"Unknown store '{config.store}', expected one of {', '.join(STORE_BACKENDS)}",
        ))

    if config.catalog_size_warning < 0:
        errors.append(ValidationError(
            field="catalog_size_warning",
            message=f"Threshold must not be negative, got {config.catalog_size_warning}",
        ))

    if config.store == "memory" and not config.seed_path:
        errors.append(ValidationError(
            field="seed_path",
            message="Memory store has no seed file; catalog will be empty",
            severity="warning",
        ))

    seen_names: set[str] = set()
    for i, preset in enumerate(config.filter_presets):
        if not preset.name:
            errors.append(ValidationError(
                field=f"filter_presets[{i}].name",
                message="Preset name must not be empty",
            ))
        elif preset.name in seen_names:
            errors.append(ValidationError(
                field=f"filter_presets[{i}].name",
                message=f"Duplicate preset name '{preset.name}'",
            ))
        seen_names.add(preset.name)

        for j, criterion in enumerate(preset.criteria):
            errors.extend(validate_criterion(
                criterion,
                f"filter_presets[{i}].criteria[{j}]",
            ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
