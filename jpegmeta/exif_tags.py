# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Tag name tables

Maps numeric tag ids to the names reported in the output, per directory
kind: EXIF (IFD0, IFD1 and the Exif SubIFD share one table), GPS and IPTC.
Tags without a name here are decoded but not reported. The tables are
read-only process-wide configuration.

Copyright 2025 DNAi inc.
"""

from types import MappingProxyType
from typing import Hashable, Mapping, Optional

# Directory kinds
EXIF = 'exif'
GPS = 'gps'
IPTC = 'iptc'

# Pointer tags: their value is the offset of a nested IFD, never reported
EXIF_IFD_POINTER = 0x8769
GPS_IFD_POINTER = 0x8825

EXIF_TAG_NAMES = {
    # ============================================================
    # IFD0 (Image) Tags
    # ============================================================
    0x0100: "ImageWidth",
    0x0101: "ImageHeight",
    0x0103: "Compression",
    0x010E: "ImageDescription",
    0x010F: "Make",
    0x0110: "Model",
    0x0112: "Orientation",
    0x011A: "XResolution",
    0x011B: "YResolution",
    0x0128: "ResolutionUnit",
    0x0131: "Software",
    0x0132: "ModifyDate",
    0x013B: "Artist",
    0x0213: "YCbCrPositioning",
    0x8298: "Copyright",

    # ============================================================
    # IFD1 (Thumbnail) Tags
    # ============================================================
    0x0201: "ThumbnailOffset",
    0x0202: "ThumbnailSize",

    # ============================================================
    # Exif SubIFD Tags
    # ============================================================
    0x829A: "ExposureTime",
    0x829D: "FNumber",
    0x8822: "ExposureProgram",
    0x8827: "ISO",
    0x9003: "DateTimeOriginal",
    0x9004: "DateTimeDigitized",
    0x9205: "MaxApertureValue",
    0x9207: "MeteringMode",
    0x9208: "LightSource",
    0x9209: "Flash",
    0x920A: "FocalLength",
    0x9290: "SubSecTime",
    0x9291: "SubSecTimeOriginal",
    0x9292: "SubSecTimeDigitized",
    0xA001: "ColorSpace",
    0xA002: "PixelXDimension",
    0xA003: "PixelYDimension",
    0xA217: "SensingMethod",
    0xA401: "CustomRendered",
    0xA402: "ExposureMode",
    0xA403: "WhiteBalance",
    0xA404: "DigitalZoomRatio",
    0xA405: "FocalLengthIn35mmFilm",
    0xA406: "SceneCaptureType",
    0xA420: "ImageUniqueID",
    0xA430: "CameraOwnerName",
    0xA431: "BodySerialNumber",
    0xA432: "LensSpecification",
    0xA433: "LensMake",
    0xA434: "LensModel",
    0xA435: "LensSerialNumber",
}

GPS_TAG_NAMES = {
    # ============================================================
    # GPS IFD Tags (0x0000 - 0x001F)
    # ============================================================
    0x0001: "GPSLatitudeRef",
    0x0002: "GPSLatitude",
    0x0003: "GPSLongitudeRef",
    0x0004: "GPSLongitude",
    0x0005: "GPSAltitudeRef",
    0x0006: "GPSAltitude",
    0x0007: "GPSTimeStamp",
    0x0008: "GPSSatellites",
    0x0009: "GPSStatus",
    0x000A: "GPSMeasureMode",
    0x000B: "GPSDOP",
    0x000C: "GPSSpeedRef",
    0x000D: "GPSSpeed",
    0x000E: "GPSTrackRef",
    0x000F: "GPSTrack",
    0x0010: "GPSImgDirectionRef",
    0x0011: "GPSImgDirection",
    0x0012: "GPSMapDatum",
    0x0013: "GPSDestLatitudeRef",
    0x0014: "GPSDestLatitude",
    0x0015: "GPSDestLongitudeRef",
    0x0016: "GPSDestLongitude",
    0x0017: "GPSDestBearingRef",
    0x0018: "GPSDestBearing",
    0x0019: "GPSDestDistanceRef",
    0x001A: "GPSDestDistance",
    0x001D: "GPSDateStamp",
    0x001E: "GPSDifferential",
}

# IPTC-IIM datasets, keyed by (record, dataset)
IPTC_TAG_NAMES = {
    # Record 1: Envelope Record
    (1, 0): "EnvelopeRecordVersion",
    (1, 5): "Destination",
    (1, 20): "FileFormat",
    (1, 22): "FileVersion",
    (1, 30): "ServiceIdentifier",
    (1, 40): "EnvelopeNumber",
    (1, 50): "ProductID",
    (1, 60): "EnvelopePriority",
    (1, 70): "DateSent",
    (1, 80): "TimeSent",
    (1, 90): "CodedCharacterSet",
    (1, 100): "UniqueObjectName",

    # Record 2: Application Record
    (2, 0): "ApplicationRecordVersion",
    (2, 5): "ObjectName",
    (2, 7): "EditStatus",
    (2, 10): "Urgency",
    (2, 15): "Category",
    (2, 20): "SupplementalCategories",
    (2, 22): "FixtureIdentifier",
    (2, 25): "Keywords",
    (2, 26): "ContentLocationCode",
    (2, 27): "ContentLocationName",
    (2, 30): "ReleaseDate",
    (2, 35): "ReleaseTime",
    (2, 37): "ExpirationDate",
    (2, 38): "ExpirationTime",
    (2, 40): "SpecialInstructions",
    (2, 55): "DateCreated",
    (2, 60): "TimeCreated",
    (2, 62): "DigitalCreationDate",
    (2, 63): "DigitalCreationTime",
    (2, 65): "OriginatingProgram",
    (2, 70): "ProgramVersion",
    (2, 75): "ObjectCycle",
    (2, 80): "Byline",
    (2, 85): "BylineTitle",
    (2, 90): "City",
    (2, 92): "Sublocation",
    (2, 95): "ProvinceState",
    (2, 100): "CountryCode",
    (2, 101): "CountryName",
    (2, 103): "OriginalTransmissionReference",
    (2, 105): "Headline",
    (2, 110): "Credit",
    (2, 115): "Source",
    (2, 116): "CopyrightNotice",
    (2, 118): "Contact",
    (2, 120): "Description",
    (2, 122): "WriterEditor",
    (2, 135): "LanguageIdentifier",
}

TAG_TABLES: Mapping[str, Mapping[Hashable, str]] = MappingProxyType({
    EXIF: MappingProxyType(EXIF_TAG_NAMES),
    GPS: MappingProxyType(GPS_TAG_NAMES),
    IPTC: MappingProxyType(IPTC_TAG_NAMES),
})


def tag_name(kind: str, tag_id: Hashable) -> Optional[str]:
    """
    Look up the reported name of a tag.

    Args:
        kind: Directory kind ('exif', 'gps' or 'iptc')
        tag_id: Numeric tag id, or a (record, dataset) pair for IPTC

    Returns:
        The tag name, or None for unknown kinds and unnamed tags
    """
    table = TAG_TABLES.get(kind)
    if table is None:
        return None
    return table.get(tag_id)
