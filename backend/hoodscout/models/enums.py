"""Closed vocabularies shared by the weighting and scoring engine."""
from enum import Enum as PyEnum
from typing import List


class Category(str, PyEnum):
    SECURITY = "Security"
    SHOPS = "Shops"
    SCHOOLS = "Schools"
    HOSPITALS = "Hospitals"
    FIRE_STATIONS = "FireStations"
    POLICE_STATIONS = "PoliceStations"
    NIGHT_LEISURE = "NightLeisure"
    DAY_LEISURE = "DayLeisure"
    UNIVERSITIES = "Universities"
    PUBLIC_TRANSPORT = "PublicTransport"
    TAXIS = "Taxis"
    BIKE_LANES = "BikeLanes"
    WALKABILITY = "Walkability"
    PARKING = "Parking"
    # Lifestyle categories
    CONNECTIVITY = "Connectivity"
    GREEN_ZONES = "GreenZones"
    NOISE = "Noise"
    AIR_QUALITY = "AirQuality"
    OCCUPABILITY = "Occupability"
    ACCESSIBILITY = "Accessibility"
    SALARY = "Salary"


class SalaryTier(str, PyEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Categories whose 0-100 value comes from the flat per-neighborhood record
CORE_CATEGORIES: List[Category] = [
    Category.SECURITY,
    Category.SHOPS,
    Category.SCHOOLS,
    Category.HOSPITALS,
    Category.FIRE_STATIONS,
    Category.POLICE_STATIONS,
    Category.NIGHT_LEISURE,
    Category.DAY_LEISURE,
    Category.UNIVERSITIES,
    Category.PUBLIC_TRANSPORT,
    Category.TAXIS,
    Category.BIKE_LANES,
    Category.WALKABILITY,
    Category.PARKING,
]

# Lifestyle categories scored linearly, keyed to their LifestyleExtras attribute
LINEAR_LIFESTYLE_CATEGORIES = {
    Category.CONNECTIVITY: "connectivity",
    Category.OCCUPABILITY: "occupability",
    Category.ACCESSIBILITY: "accessibility",
}

# Lifestyle categories with a non-linear threshold adjustment on top of the linear term
THRESHOLD_CATEGORIES = {
    Category.GREEN_ZONES: "green_zones",
    Category.NOISE: "noise",
    Category.AIR_QUALITY: "air_quality",
}
