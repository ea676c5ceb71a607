"""Android SDK (API level) catalog used for the SDK prompts."""

from __future__ import annotations

from dataclasses import dataclass

MIN_SUPPORTED_API = 14
DEFAULT_MIN_SDK = 19


@dataclass(frozen=True)
class AndroidVersion:
    """One Android platform release."""

    api: int
    semver: str
    name: str

    @property
    def label(self) -> str:
        return f"API {self.api}: Android {self.semver} ({self.name})"


# (api, version, codename)
_VERSIONS: tuple[tuple[int, str, str], ...] = (
    (1, "1.0", "BASE"),
    (2, "1.1", "BASE_1_1"),
    (3, "1.5", "CUPCAKE"),
    (4, "1.6", "DONUT"),
    (5, "2.0", "ECLAIR"),
    (6, "2.0.1", "ECLAIR_0_1"),
    (7, "2.1", "ECLAIR_MR1"),
    (8, "2.2", "FROYO"),
    (9, "2.3", "GINGERBREAD"),
    (10, "2.3.3", "GINGERBREAD_MR1"),
    (11, "3.0", "HONEYCOMB"),
    (12, "3.1", "HONEYCOMB_MR1"),
    (13, "3.2", "HONEYCOMB_MR2"),
    (14, "4.0", "ICE_CREAM_SANDWICH"),
    (15, "4.0.3", "ICE_CREAM_SANDWICH_MR1"),
    (16, "4.1", "JELLY_BEAN"),
    (17, "4.2", "JELLY_BEAN_MR1"),
    (18, "4.3", "JELLY_BEAN_MR2"),
    (19, "4.4", "KITKAT"),
    (20, "4.4W", "KITKAT_WATCH"),
    (21, "5.0", "LOLLIPOP"),
    (22, "5.1", "LOLLIPOP_MR1"),
    (23, "6.0", "M"),
    (24, "7.0", "N"),
    (25, "7.1", "N_MR1"),
    (26, "8.0.0", "O"),
    (27, "8.1.0", "O_MR1"),
    (28, "9", "P"),
    (29, "10", "Q"),
    (30, "11", "R"),
    (31, "12", "S"),
    (32, "12L", "S_V2"),
    (33, "13", "TIRAMISU"),
    (34, "14", "UPSIDE_DOWN_CAKE"),
    (35, "15", "VANILLA_ICE_CREAM"),
)

ALL_VERSIONS: tuple[AndroidVersion, ...] = tuple(
    AndroidVersion(api, semver, name) for api, semver, name in _VERSIONS
)


def get_versions(min_api: int = MIN_SUPPORTED_API) -> list[AndroidVersion]:
    """Return versions with ``api >= min_api``, oldest first."""
    return [version for version in ALL_VERSIONS if version.api >= min_api]


def find_version(api: int) -> AndroidVersion | None:
    for version in ALL_VERSIONS:
        if version.api == api:
            return version
    return None


def default_min_sdk() -> int:
    return DEFAULT_MIN_SDK


def default_target_sdk() -> int:
    """Newest known API level."""
    return ALL_VERSIONS[-1].api
