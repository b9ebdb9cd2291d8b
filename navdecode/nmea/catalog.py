"""Built-in message schemas.

GGA Sentence Format:
    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
           |      |        | |         | | |  |   |     | |    | |
           |      |        | |         | | |  |   |     | |    | +-- DGPS station id
           |      |        | |         | | |  |   |     | |    +-- DGPS age (s)
           |      |        | |         | | |  |   |     | +-- geoid separation, M
           |      |        | |         | | |  |   +-----+-- altitude above MSL, M
           |      |        | |         | | |  +-- HDOP
           |      |        | |         | | +-- number of satellites
           |      |        | |         | +-- fix quality (0-8)
           |      |        | +---------+-- longitude DDDMM.MMMM + E/W
           |      +--------+-- latitude DDMM.MMMM + N/S
           +-- UTC time HHMMSS.ss

VTG Sentence Format:
    $GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B
           |     | |     | |     | |     | +-- mode indicator (A/D/E/N/...)
           |     | |     | |     | +-----+-- speed, km/h
           |     | |     | +-----+-- speed, knots
           |     | +-----+-- track, magnetic north
           +-----+-- track, true north

Also included: HDT (true heading), ZDA (date and time), GMP (map
projection), ROT and SPD (three-axis rotation rate and velocity) and the
Hemisphere ``$PSAT,HPR`` heading/pitch/roll sentence.
"""

from navdecode.nmea.fields import FieldSpec
from navdecode.nmea.postprocess import FixModes, decimal_degrees, fix_quality, utc_time
from navdecode.nmea.schema import MessageSchema
from navdecode.nmea.tokens import skip

__all__ = [
    "ALL_SCHEMAS",
    "GGA",
    "GMP",
    "HDT",
    "PSATHPR",
    "ROT",
    "SPD",
    "VTG",
    "ZDA",
]


def _utc() -> FieldSpec:
    return FieldSpec("utc", ("%2f32", "%2f32", "%f32"), utc_time)


GGA = MessageSchema(
    "GGA",
    (
        _utc(),
        FieldSpec("latitude", ("%2f64", "%f64", "%c"), decimal_degrees),
        FieldSpec("longitude", ("%3f64", "%f64", "%c"), decimal_degrees),
        FieldSpec("quality", "%u8", fix_quality),
        FieldSpec("numsat", "%u8"),
        FieldSpec("hdop", "%f32"),
        FieldSpec("alt", "%f32 M"),
        FieldSpec("geoid", "%f32 M"),
        FieldSpec("age_dgps", "%f32"),
        FieldSpec("ref_station_id", "%u16"),
    ),
)

VTG = MessageSchema(
    "VTG",
    (
        FieldSpec("track_dir_true", "%f32 T"),
        FieldSpec("track_dir_magn", "%f32 M"),
        FieldSpec("speed_over_ground_kts", "%f32 N"),
        FieldSpec("speed_over_ground_kmh", "%f32 K"),
        FieldSpec("mode_indicator", "%s", FixModes()),
    ),
)

HDT = MessageSchema("HDT", (FieldSpec("heading", "%f32 T"),))

ZDA = MessageSchema(
    "ZDA",
    (
        _utc(),
        FieldSpec("day", "%u8"),
        FieldSpec("month", "%u8"),
        FieldSpec("year", "%u16"),
        FieldSpec("zone_hours", "%d8"),
        FieldSpec("zone_minutes", "%u8"),
    ),
)

# Mode carries one character per constellation: GPS, then GLONASS
GMP = MessageSchema(
    "GMP",
    (
        _utc(),
        FieldSpec("project_id"),
        FieldSpec("project_zone"),
        FieldSpec("x", "%f64"),
        FieldSpec("y", "%f64"),
        FieldSpec("mode", "%s", FixModes(columns=2)),
        FieldSpec("numsat", "%u8"),
        FieldSpec("hdop", "%f32"),
        FieldSpec("alt", "%f32"),
        FieldSpec("geoid", "%f32"),
        FieldSpec("age_dgps", "%f32"),
        FieldSpec("ref_station_id", "%u16"),
    ),
)

ROT = MessageSchema(
    "ROT",
    (
        FieldSpec("x_rot", "%f32"),
        FieldSpec("y_rot", "%f32"),
        FieldSpec("z_rot", "%f32"),
    ),
)

SPD = MessageSchema(
    "SPD",
    (
        FieldSpec("x_vel", "%f32"),
        FieldSpec("y_vel", "%f32"),
        FieldSpec("z_vel", "%f32"),
    ),
)

# $PSAT,HPR,time,heading,pitch,roll,type*hh where type is N (GPS) or G (gyro)
PSATHPR = MessageSchema(
    "HPR",
    (
        _utc(),
        FieldSpec("heading", "%f32"),
        FieldSpec("pitch", "%f32"),
        FieldSpec("roll", "%f32"),
        FieldSpec("solution_type", (skip(r"\w"),)),
    ),
    talker_id_pattern="PSAT,",
    name="PSATHPR",
)

ALL_SCHEMAS = (GGA, VTG, HDT, ZDA, GMP, ROT, SPD, PSATHPR)
