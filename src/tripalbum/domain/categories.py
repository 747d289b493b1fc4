from enum import Enum
from typing import Dict, Iterable, List


class AppCategory(str, Enum):
    FOODS = "Foods"
    RESTAURANTS = "Restaurants"
    COFFEE = "Coffee"
    BAKERY = "Bakery"
    BAR = "Bar"
    HOTELS_RESORT = "Hotels/Resort"
    LODGING = "Lodging"
    SHOPPING = "Shopping"
    ATTRACTIONS = "Attractions"
    SIGHTSEEING = "Sightseeing"
    ACTIVITY = "Activity"
    GOLF = "Golf"
    AIRPORT = "Airport"
    GROCERY = "Grocery"
    TRANSPORTATION = "Transportation"
    PARK = "Park"


C = AppCategory

PLACE_TYPE_CATEGORIES: Dict[str, List[AppCategory]] = {
    # food & drink
    "restaurant": [C.RESTAURANTS, C.FOODS],
    "meal_delivery": [C.RESTAURANTS, C.FOODS],
    "meal_takeaway": [C.RESTAURANTS, C.FOODS],
    "food": [C.FOODS],
    "cafe": [C.COFFEE, C.FOODS],
    "coffee_shop": [C.COFFEE, C.FOODS],
    "bakery": [C.BAKERY, C.FOODS, C.SHOPPING],
    "bar": [C.BAR],
    "night_club": [C.BAR],
    "liquor_store": [C.SHOPPING],
    # lodging
    "lodging": [C.LODGING],
    "hotel": [C.LODGING, C.HOTELS_RESORT],
    "motel": [C.LODGING],
    "resort": [C.LODGING, C.HOTELS_RESORT],
    "spa": [C.ACTIVITY, C.HOTELS_RESORT],
    # shopping
    "store": [C.SHOPPING],
    "shopping_mall": [C.SHOPPING],
    "department_store": [C.SHOPPING],
    "clothing_store": [C.SHOPPING],
    "shoe_store": [C.SHOPPING],
    "jewelry_store": [C.SHOPPING],
    "electronics_store": [C.SHOPPING],
    "book_store": [C.SHOPPING],
    "convenience_store": [C.SHOPPING, C.GROCERY],
    "home_goods_store": [C.SHOPPING],
    "furniture_store": [C.SHOPPING],
    "hardware_store": [C.SHOPPING],
    "pet_store": [C.SHOPPING],
    "florist": [C.SHOPPING],
    "grocery_or_supermarket": [C.GROCERY, C.SHOPPING],
    # sightseeing & activities
    "tourist_attraction": [C.ATTRACTIONS, C.SIGHTSEEING],
    "point_of_interest": [C.ATTRACTIONS, C.SIGHTSEEING],
    "landmark": [C.ATTRACTIONS, C.SIGHTSEEING],
    "museum": [C.ATTRACTIONS, C.SIGHTSEEING, C.ACTIVITY],
    "art_gallery": [C.ATTRACTIONS, C.SIGHTSEEING, C.ACTIVITY],
    "church": [C.ATTRACTIONS, C.SIGHTSEEING],
    "hindu_temple": [C.ATTRACTIONS, C.SIGHTSEEING],
    "mosque": [C.ATTRACTIONS, C.SIGHTSEEING],
    "synagogue": [C.ATTRACTIONS, C.SIGHTSEEING],
    "amusement_park": [C.ATTRACTIONS, C.ACTIVITY],
    "aquarium": [C.ATTRACTIONS, C.ACTIVITY],
    "zoo": [C.ATTRACTIONS, C.ACTIVITY],
    "park": [C.PARK, C.SIGHTSEEING, C.ACTIVITY],
    "national_park": [C.PARK, C.SIGHTSEEING],
    "stadium": [C.ATTRACTIONS, C.ACTIVITY],
    "movie_theater": [C.ACTIVITY],
    "bowling_alley": [C.ACTIVITY],
    "casino": [C.ACTIVITY, C.ATTRACTIONS],
    "gym": [C.ACTIVITY],
    "golf_course": [C.GOLF, C.ACTIVITY],
    # transport
    "airport": [C.AIRPORT, C.TRANSPORTATION],
    "train_station": [C.TRANSPORTATION],
    "subway_station": [C.TRANSPORTATION],
    "bus_station": [C.TRANSPORTATION],
    "light_rail_station": [C.TRANSPORTATION],
    "transit_station": [C.TRANSPORTATION],
    "gas_station": [C.TRANSPORTATION],
    "car_rental": [C.TRANSPORTATION],
    "parking": [C.TRANSPORTATION],
    # other
    "bank": [C.ATTRACTIONS],
    "atm": [C.ATTRACTIONS],
    "hospital": [C.ATTRACTIONS],
    "doctor": [C.ATTRACTIONS],
    "pharmacy": [C.SHOPPING],
    "post_office": [C.ATTRACTIONS],
    "library": [C.SIGHTSEEING, C.ATTRACTIONS],
    "university": [C.SIGHTSEEING, C.ATTRACTIONS],
    "school": [C.SIGHTSEEING],
    "city_hall": [C.SIGHTSEEING, C.ATTRACTIONS],
}


def map_categories(place_types: Iterable[str]) -> List[AppCategory]:
    """
    Maps raw place type tags to app categories.

    Unknown-only tag lists fall back to Attractions so every place still gets a
    category.
    """
    mapped = set()
    for place_type in place_types:
        mapped.update(PLACE_TYPE_CATEGORIES.get(place_type, []))

    if not mapped:
        return [AppCategory.ATTRACTIONS]
    return [category for category in AppCategory if category in mapped]
