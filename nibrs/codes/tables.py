"""
Code Tables — NIBRS code spaces and human-vocabulary lookup tables.

Pure data. Two kinds of tables live here:

- Code spaces (`*_CODE_NAMES`): every official code the engine may emit,
  mapped to its NIBRS name. Segment models check codes against these at
  construction time.
- Keyword tables (`*_CODES`, `*_KEYWORDS`): human vocabulary mapped to
  codes. Each keyword table leads with its generic "other/unknown" entry,
  which is what the fuzzy matcher falls back to.

Everything is exposed read-only (MappingProxyType / frozenset).
"""

from types import MappingProxyType


# ============================================================================
# Offense Code Space (NIBRS Data Element 6)
# ============================================================================

GROUP_A_OFFENSE_NAMES = MappingProxyType({
    "09A": "Murder and Nonnegligent Manslaughter",
    "09B": "Negligent Manslaughter",
    "09C": "Justifiable Homicide",
    "100": "Kidnapping/Abduction",
    "11A": "Rape",
    "11B": "Sodomy",
    "11C": "Sexual Assault With An Object",
    "11D": "Fondling",
    "120": "Robbery",
    "13A": "Aggravated Assault",
    "13B": "Simple Assault",
    "13C": "Intimidation",
    "200": "Arson",
    "210": "Extortion/Blackmail",
    "220": "Burglary/Breaking & Entering",
    "23A": "Pocket-picking",
    "23B": "Purse-snatching",
    "23C": "Shoplifting",
    "23D": "Theft From Building",
    "23E": "Theft From Coin-Operated Machine or Device",
    "23F": "Theft From Motor Vehicle",
    "23G": "Theft of Motor Vehicle Parts or Accessories",
    "23H": "All Other Larceny",
    "240": "Motor Vehicle Theft",
    "250": "Counterfeiting/Forgery",
    "26A": "False Pretenses/Swindle/Confidence Game",
    "26B": "Credit Card/Automated Teller Machine Fraud",
    "26C": "Impersonation",
    "26D": "Welfare Fraud",
    "26E": "Wire Fraud",
    "26F": "Identity Theft",
    "26G": "Hacking/Computer Invasion",
    "26H": "Money Laundering",
    "270": "Embezzlement",
    "280": "Stolen Property Offenses",
    "290": "Destruction/Damage/Vandalism of Property",
    "35A": "Drug/Narcotic Violations",
    "35B": "Drug Equipment Violations",
    "35C": "Drug Sale/Distribution",
    "35D": "Drug Manufacturing/Cultivation",
    "36A": "Incest",
    "36B": "Statutory Rape",
    "39A": "Betting/Wagering",
    "39B": "Operating/Promoting/Assisting Gambling",
    "39C": "Gambling Equipment Violations",
    "39D": "Sports Tampering",
    "40A": "Prostitution",
    "40B": "Assisting or Promoting Prostitution",
    "40C": "Purchasing Prostitution",
    "510": "Bribery",
    "520": "Weapon Law Violations",
    "64A": "Human Trafficking, Commercial Sex Acts",
    "64B": "Human Trafficking, Involuntary Servitude",
    "720": "Animal Cruelty",
})

GROUP_B_OFFENSE_NAMES = MappingProxyType({
    "90A": "Bad Checks",
    "90B": "Curfew/Loitering/Vagrancy Violations",
    "90C": "Disorderly Conduct",
    "90D": "Driving Under the Influence",
    "90E": "Drunkenness",
    "90F": "Family Offenses, Nonviolent",
    "90G": "Liquor Law Violations",
    "90H": "Peeping Tom",
    "90J": "Trespass of Real Property",
    "90Z": "All Other Offenses",
})

GROUP_A_CODES = frozenset(GROUP_A_OFFENSE_NAMES)
GROUP_B_CODES = frozenset(GROUP_B_OFFENSE_NAMES)
OFFENSE_CODES = GROUP_A_CODES | GROUP_B_CODES


# ============================================================================
# Offense Keyword Tables
# ============================================================================

# Substring fallback for map_offense, consulted after the classification
# rules. Longest keyword wins.
GROUP_A_OFFENSE_CODES = MappingProxyType({
    "murder": "09A",
    "homicide": "09A",
    "negligent manslaughter": "09B",
    "manslaughter": "09B",
    "justifiable homicide": "09C",
    "kidnapping": "100",
    "kidnapped": "100",
    "abduction": "100",
    "abducted": "100",
    "rape": "11A",
    "sodomy": "11B",
    "sexual assault with an object": "11C",
    "fondling": "11D",
    "groping": "11D",
    "robbery": "120",
    "robbed": "120",
    "aggravated assault": "13A",
    "simple assault": "13B",
    "assault": "13B",
    "intimidation": "13C",
    "arson": "200",
    "extortion": "210",
    "blackmail": "210",
    "burglary": "220",
    "breaking and entering": "220",
    "pickpocket": "23A",
    "purse snatching": "23B",
    "shoplifting": "23C",
    "theft from building": "23D",
    "theft from motor vehicle": "23F",
    "larceny": "23H",
    "theft": "23H",
    "motor vehicle theft": "240",
    "counterfeit": "250",
    "forgery": "250",
    "swindle": "26A",
    "fraud": "26A",
    "credit card fraud": "26B",
    "impersonation": "26C",
    "welfare fraud": "26D",
    "wire fraud": "26E",
    "identity theft": "26F",
    "hacking": "26G",
    "money laundering": "26H",
    "embezzlement": "270",
    "stolen property": "280",
    "vandalism": "290",
    "graffiti": "290",
    "drug": "35A",
    "narcotic": "35A",
    "marijuana": "35A",
    "drug paraphernalia": "35B",
    "incest": "36A",
    "statutory rape": "36B",
    "betting": "39A",
    "gambling": "39B",
    "prostitution": "40A",
    "bribery": "510",
    "weapon violation": "520",
    "human trafficking": "64A",
    "animal cruelty": "720",
})

GROUP_B_OFFENSE_CODES = MappingProxyType({
    "bad check": "90A",
    "curfew": "90B",
    "loitering": "90B",
    "vagrancy": "90B",
    "disorderly conduct": "90C",
    "driving under the influence": "90D",
    "dui": "90D",
    "dwi": "90D",
    "drunkenness": "90E",
    "public intoxication": "90E",
    "family offense": "90F",
    "liquor law": "90G",
    "underage drinking": "90G",
    "peeping tom": "90H",
    "trespass": "90J",
})


# ============================================================================
# Offense Classes
# ============================================================================

# Offenses reported against Society/Public rather than a person.
VICTIMLESS_OFFENSE_CODES = frozenset({
    "35A", "35B", "35C", "35D",
    "90A", "90B", "90C", "90D", "90E", "90F", "90G",
    "100",
    "520",
    "720",
})

VIOLENT_OFFENSE_CODES = frozenset({
    "09A", "09B", "09C",
    "11A", "11B", "11C", "11D",
    "120",
    "13A", "13B", "13C",
})

# Offenses where a missing offender segment is worth a warning.
SERIOUS_OFFENSE_CODES = frozenset({
    "09A", "09B",
    "11A", "11B", "11C", "11D",
    "120",
    "13A",
})


# Offenses that carry a Type Weapon/Force Involved data element.
WEAPON_FORCE_OFFENSE_CODES = frozenset({
    "09A", "09B", "09C",
    "11A", "11B", "11C", "11D",
    "100", "120", "13A", "13B", "210",
    "520", "64A", "64B",
})


# ============================================================================
# Location (NIBRS Data Element 9)
# ============================================================================

LOCATION_CODE_NAMES = MappingProxyType({
    "01": "Air/Bus/Train Terminal",
    "02": "Bank/Savings and Loan",
    "03": "Bar/Nightclub",
    "04": "Church/Synagogue/Temple/Mosque",
    "05": "Commercial/Office Building",
    "06": "Construction Site",
    "07": "Convenience Store",
    "08": "Department/Discount Store",
    "09": "Drug Store/Doctor's Office/Hospital",
    "10": "Field/Woods",
    "11": "Government/Public Building",
    "12": "Grocery/Supermarket",
    "13": "Highway/Road/Alley/Street/Sidewalk",
    "14": "Hotel/Motel/Etc.",
    "15": "Jail/Prison/Penitentiary/Corrections Facility",
    "16": "Lake/Waterway/Beach",
    "17": "Liquor Store",
    "18": "Parking/Drop Lot/Garage",
    "19": "Rental Storage Facility",
    "20": "Residence/Home",
    "21": "Restaurant",
    "23": "Service/Gas Station",
    "24": "Specialty Store",
    "25": "Other/Unknown",
    "37": "Abandoned/Condemned Structure",
    "38": "Amusement Park",
    "39": "Arena/Stadium/Fairgrounds/Coliseum",
    "40": "ATM Separate from Bank",
    "41": "Auto Dealership New/Used",
    "42": "Camp/Campground",
    "44": "Daycare Facility",
    "45": "Dock/Wharf/Freight/Modal Terminal",
    "46": "Farm Facility",
    "47": "Gambling Facility/Casino/Race Track",
    "48": "Industrial Site",
    "49": "Military Installation",
    "50": "Park/Playground",
    "51": "Rest Area",
    "52": "School-College/University",
    "53": "School-Elementary/Secondary",
    "54": "Shelter-Mission/Homeless",
    "55": "Shopping Mall",
    "56": "Tribal Lands",
    "57": "Community Center",
    "58": "Cyberspace",
})

LOCATION_CODE_SPACE = frozenset(LOCATION_CODE_NAMES)

GENERIC_LOCATION_CODE = "25"
CYBERSPACE_LOCATION_CODE = "58"

LOCATION_CODES = MappingProxyType({
    "other/unknown": "25",
    "residence/home": "20",
    "residence": "20",
    "home": "20",
    "house": "20",
    "apartment": "20",
    "highway/road/alley/street/sidewalk": "13",
    "street": "13",
    "road": "13",
    "highway": "13",
    "sidewalk": "13",
    "alley": "13",
    "intersection": "13",
    "parking/drop lot/garage": "18",
    "parking lot": "18",
    "parking garage": "18",
    "bar/nightclub": "03",
    "nightclub": "03",
    "restaurant": "21",
    "school-college/university": "52",
    "university": "52",
    "school-elementary/secondary": "53",
    "high school": "53",
    "school": "53",
    "government/public building": "11",
    "hotel/motel": "14",
    "service/gas station": "23",
    "gas station": "23",
    "bank/savings and loan": "02",
    "bank": "02",
    "department/discount store": "08",
    "convenience store": "07",
    "grocery/supermarket": "12",
    "liquor store": "17",
    "specialty store": "24",
    "church/synagogue/temple/mosque": "04",
    "commercial/office building": "05",
    "drug store/doctor's office/hospital": "09",
    "hospital": "09",
    "park/playground": "50",
    "shopping mall": "55",
    "jail/prison": "15",
    "field/woods": "10",
    "lake/waterway/beach": "16",
    "air/bus/train terminal": "01",
    "construction site": "06",
    "atm separate from bank": "40",
    "cyberspace": "58",
})


# ============================================================================
# Weapon / Force (NIBRS Data Element 13)
# ============================================================================

WEAPON_CODE_NAMES = MappingProxyType({
    "11": "Firearm (type not stated)",
    "12": "Handgun",
    "13": "Rifle",
    "14": "Shotgun",
    "15": "Other Firearm",
    "20": "Knife/Cutting Instrument",
    "30": "Blunt Object",
    "35": "Motor Vehicle/Vessel",
    "40": "Personal Weapons",
    "50": "Poison",
    "60": "Explosives",
    "65": "Fire/Incendiary Device",
    "70": "Drugs/Narcotics/Sleeping Pills",
    "85": "Asphyxiation",
    "90": "Other",
    "95": "Unknown",
    "99": "None",
})

WEAPON_CODE_SPACE = frozenset(WEAPON_CODE_NAMES)

WEAPON_CODES = MappingProxyType({
    "unknown": "95",
    "firearm": "11",
    "gun": "11",
    "handgun": "12",
    "pistol": "12",
    "revolver": "12",
    "rifle": "13",
    "shotgun": "14",
    "other firearm": "15",
    "knife/cutting instrument": "20",
    "knife": "20",
    "blunt object": "30",
    "motor vehicle": "35",
    "personal weapons (hands/feet/teeth)": "40",
    "hands": "40",
    "poison": "50",
    "explosives": "60",
    "fire/incendiary device": "65",
    "drugs/narcotics/sleeping pills": "70",
    "asphyxiation": "85",
    "other": "90",
    "none": "99",
})


# ============================================================================
# Property Description (NIBRS Data Element 15)
# ============================================================================

PROPERTY_CODE_NAMES = MappingProxyType({
    "01": "Aircraft",
    "02": "Alcohol",
    "03": "Automobiles",
    "04": "Bicycles",
    "05": "Buses",
    "06": "Clothes/Furs",
    "07": "Computer Hardware/Software",
    "08": "Consumable Goods",
    "09": "Credit/Debit Cards",
    "10": "Drugs/Narcotics",
    "11": "Drug/Narcotic Equipment",
    "12": "Farm Equipment",
    "13": "Firearms",
    "14": "Gambling Equipment",
    "15": "Heavy Construction/Industrial Equipment",
    "16": "Household Goods",
    "17": "Jewelry/Precious Metals/Gems",
    "18": "Livestock",
    "19": "Merchandise",
    "20": "Money",
    "21": "Negotiable Instruments",
    "22": "Nonnegotiable Instruments",
    "23": "Office-type Equipment",
    "24": "Other Motor Vehicles",
    "25": "Purses/Handbags/Wallets",
    "26": "Radios/TVs/VCRs/DVD Players",
    "27": "Recordings-Audio/Visual",
    "28": "Recreational Vehicles",
    "29": "Structures-Single Occupancy Dwellings",
    "30": "Structures-Other Dwellings",
    "31": "Structures-Other Commercial/Business",
    "32": "Structures-Industrial/Manufacturing",
    "33": "Structures-Public/Community",
    "34": "Structures-Storage",
    "35": "Structures-Other",
    "36": "Tools",
    "37": "Trucks",
    "38": "Vehicle Parts/Accessories",
    "39": "Watercraft",
    "41": "Aircraft Parts/Accessories",
    "42": "Artistic Supplies/Accessories",
    "43": "Building Materials",
    "44": "Camping/Hunting/Fishing Equipment/Supplies",
    "45": "Chemicals",
    "46": "Collections/Collectibles",
    "47": "Crops",
    "48": "Documents/Personal or Business",
    "49": "Explosives",
    "59": "Firearm Accessories",
    "64": "Fuel",
    "65": "Identity Documents",
    "66": "Identity-Intangible",
    "67": "Law Enforcement Equipment",
    "68": "Lawn/Yard/Garden Equipment",
    "69": "Logging Equipment",
    "70": "Medical/Medical Lab Equipment",
    "71": "Metals, Non-Precious",
    "72": "Musical Instruments",
    "73": "Pets",
    "74": "Photographic/Optical Equipment",
    "75": "Portable Electronic Communications",
    "76": "Recreational/Sports Equipment",
    "77": "Other",
    "78": "Trailers",
    "79": "Watercraft Equipment/Parts/Accessories",
    "80": "Weapons-Other",
    "88": "Pending Inventory",
})

PROPERTY_CODE_SPACE = frozenset(PROPERTY_CODE_NAMES)

GENERIC_PROPERTY_CODE = "77"
DRUG_PROPERTY_CODE = "10"

PROPERTY_CODES = MappingProxyType({
    "other": "77",
    "automobiles": "03",
    "car": "03",
    "bicycles": "04",
    "clothes/furs": "06",
    "clothing": "06",
    "computer hardware/software": "07",
    "computer": "07",
    "credit/debit cards": "09",
    "credit card": "09",
    "drugs/narcotics": "10",
    "drug/narcotic equipment": "11",
    "firearms": "13",
    "household goods": "16",
    "jewelry/precious metals/gems": "17",
    "jewelry": "17",
    "merchandise": "19",
    "money": "20",
    "currency": "20",
    "negotiable instruments": "21",
    "office-type equipment": "23",
    "purses/handbags/wallets": "25",
    "wallet": "25",
    "radios/tvs/vcrs/dvd players": "26",
    "television": "26",
    "tools": "36",
    "trucks": "37",
    "vehicle parts/accessories": "38",
    "identity documents": "65",
    "portable electronic communications": "75",
    "cell phone": "75",
    "weapons-other": "80",
})


# ============================================================================
# Victim-Offender Relationship (NIBRS Data Element 35)
# ============================================================================

RELATIONSHIP_CODE_NAMES = MappingProxyType({
    "SE": "Victim Was Spouse",
    "CS": "Victim Was Common-Law Spouse",
    "PA": "Victim Was Parent",
    "SB": "Victim Was Sibling",
    "CH": "Victim Was Child",
    "GP": "Victim Was Grandparent",
    "GC": "Victim Was Grandchild",
    "IL": "Victim Was In-law",
    "SP": "Victim Was Stepparent",
    "SC": "Victim Was Stepchild",
    "SS": "Victim Was Stepsibling",
    "OF": "Victim Was Other Family Member",
    "VO": "Victim Was Offender",
    "AQ": "Victim Was Acquaintance",
    "FR": "Victim Was Friend",
    "NE": "Victim Was Neighbor",
    "BE": "Victim Was Babysittee",
    "BG": "Victim Was Boyfriend/Girlfriend",
    "XS": "Victim Was Ex-Spouse",
    "EE": "Victim Was Employee",
    "ER": "Victim Was Employer",
    "OK": "Victim Was Otherwise Known",
    "RU": "Relationship Unknown",
    "ST": "Victim Was Stranger",
})

RELATIONSHIP_CODE_SPACE = frozenset(RELATIONSHIP_CODE_NAMES)

UNKNOWN_RELATIONSHIP_CODE = "RU"

RELATIONSHIP_CODES = MappingProxyType({
    "unknown": "RU",
    "spouse": "SE",
    "wife": "SE",
    "husband": "SE",
    "common-law spouse": "CS",
    "parent": "PA",
    "mother": "PA",
    "father": "PA",
    "sibling": "SB",
    "brother": "SB",
    "sister": "SB",
    "child": "CH",
    "son": "CH",
    "daughter": "CH",
    "grandparent": "GP",
    "grandmother": "GP",
    "grandfather": "GP",
    "grandchild": "GC",
    "grandson": "GC",
    "granddaughter": "GC",
    "in-law": "IL",
    "stepparent": "SP",
    "stepchild": "SC",
    "stepsibling": "SS",
    "other family member": "OF",
    "cousin": "OF",
    "uncle": "OF",
    "aunt": "OF",
    "acquaintance": "AQ",
    "friend": "FR",
    "neighbor": "NE",
    "babysittee": "BE",
    "boyfriend": "BG",
    "girlfriend": "BG",
    "ex-spouse": "XS",
    "ex-wife": "XS",
    "ex-husband": "XS",
    "employee": "EE",
    "employer": "ER",
    "otherwise known": "OK",
    "stranger": "ST",
})

# Narrative vocabulary consulted when the relationship text is empty or
# "unknown". Checked in order; the first cue found decides.
RELATIONSHIP_NARRATIVE_CUES = (
    (("ex-wife", "ex-husband", "ex-spouse"), "XS"),
    (("boyfriend", "girlfriend", "dating"), "BG"),
    (("wife", "husband", "spouse"), "SE"),
    (("neighbor",), "NE"),
    (("friend",), "FR"),
    (("acquaintance", "knew the", "known to", "coworker", "co-worker"), "AQ"),
    (("stranger", "did not know", "unknown male", "unknown female", "unknown suspect"), "ST"),
)


# ============================================================================
# Property Loss Type (NIBRS Data Element 14)
# ============================================================================

LOSS_TYPE_CODE_NAMES = MappingProxyType({
    "1": "None",
    "2": "Burned",
    "3": "Counterfeited/Forged",
    "4": "Destroyed/Damaged/Vandalized",
    "5": "Recovered",
    "6": "Seized",
    "7": "Stolen/Etc.",
    "8": "Unknown",
    "9": "Other",
})

LOSS_TYPE_CODE_SPACE = frozenset(LOSS_TYPE_CODE_NAMES)

SEIZED_LOSS_TYPE = "6"

LOSS_TYPE_KEYWORDS = MappingProxyType({
    "none": "1",
    "burned": "2",
    "burnt": "2",
    "counterfeit": "3",
    "forged": "3",
    "destroyed": "4",
    "damaged": "4",
    "vandalized": "4",
    "broken": "4",
    "recovered": "5",
    "returned": "5",
    "seized": "6",
    "confiscated": "6",
    "stole": "7",
    "stolen": "7",
    "taken": "7",
    "theft": "7",
    "unknown": "8",
})


# ============================================================================
# Drugs (NIBRS Data Elements 20 and 22)
# ============================================================================

DRUG_TYPE_NAMES = MappingProxyType({
    "A": "Crack Cocaine",
    "B": "Cocaine",
    "C": "Hashish",
    "D": "Heroin",
    "E": "Marijuana",
    "F": "Morphine",
    "G": "Opium",
    "H": "Other Narcotics",
    "I": "LSD",
    "J": "PCP",
    "K": "Other Hallucinogens",
    "L": "Amphetamines/Methamphetamines",
    "M": "Other Stimulants",
    "N": "Barbiturates",
    "O": "Other Depressants",
    "P": "Other Drugs",
    "U": "Unknown Drug Type",
    "X": "Over 3 Drug Types",
})

DRUG_TYPE_CODE_SPACE = frozenset(DRUG_TYPE_NAMES)

DRUG_TYPE_KEYWORDS = MappingProxyType({
    "crack cocaine": "A",
    "crack": "A",
    "cocaine": "B",
    "coke": "B",
    "hashish": "C",
    "heroin": "D",
    "marijuana": "E",
    "cannabis": "E",
    "weed": "E",
    "thc": "E",
    "morphine": "F",
    "opium": "G",
    "fentanyl": "H",
    "oxycodone": "H",
    "lsd": "I",
    "pcp": "J",
    "psilocybin": "K",
    "mushrooms": "K",
    "ecstasy": "K",
    "mdma": "K",
    "methamphetamine": "L",
    "meth": "L",
    "amphetamine": "L",
    "adderall": "M",
    "barbiturate": "N",
    "xanax": "O",
    "benzodiazepine": "O",
    "pills": "P",
})

DRUG_MEASUREMENT_UNITS = MappingProxyType({
    "grams": "GM",
    "gram": "GM",
    "g": "GM",
    "kilograms": "KG",
    "kilogram": "KG",
    "kilos": "KG",
    "kilo": "KG",
    "kg": "KG",
    "ounces": "OZ",
    "ounce": "OZ",
    "oz": "OZ",
    "pounds": "LB",
    "pound": "LB",
    "lbs": "LB",
    "lb": "LB",
    "milliliters": "ML",
    "ml": "ML",
    "liters": "LT",
    "liter": "LT",
    "fluid ounces": "FO",
    "gallons": "GL",
    "gallon": "GL",
    "dosage units": "DU",
    "pills": "DU",
    "tablets": "DU",
    "doses": "DU",
    "plants": "NP",
})

DRUG_PROPERTY_TERMS = frozenset({
    "drug", "narcotic", "controlled substance", "marijuana", "cannabis",
    "cocaine", "crack", "heroin", "methamphetamine", "meth", "fentanyl",
    "oxycodone", "opioid", "pills", "lsd", "ecstasy", "mdma", "hashish",
})


# ============================================================================
# Victim / Person Vocabulary (Data Elements 25, 26-29, 33)
# ============================================================================

VICTIM_TYPE_KEYWORDS = MappingProxyType({
    "individual": "I",
    "person": "I",
    "business": "B",
    "store": "B",
    "company": "B",
    "financial institution": "F",
    "bank": "F",
    "government": "G",
    "law enforcement": "L",
    "officer": "L",
    "religious": "R",
    "church": "R",
    "society": "S",
    "public": "S",
    "other": "O",
    "unknown": "U",
})

SEX_KEYWORDS = MappingProxyType({
    "male": "M",
    "man": "M",
    "boy": "M",
    "female": "F",
    "woman": "F",
    "girl": "F",
    "unknown": "U",
})

RACE_KEYWORDS = MappingProxyType({
    "white": "W",
    "caucasian": "W",
    "black": "B",
    "african american": "B",
    "american indian": "I",
    "alaska native": "I",
    "native american": "I",
    "asian": "A",
    "pacific islander": "P",
    "native hawaiian": "P",
    "unknown": "U",
})

ETHNICITY_KEYWORDS = MappingProxyType({
    "not hispanic": "N",
    "non-hispanic": "N",
    "hispanic": "H",
    "latino": "H",
    "latina": "H",
    "unknown": "U",
})

INJURY_KEYWORDS = MappingProxyType({
    "none": "N",
    "no injur": "N",
    "uninjured": "N",
    "broken": "B",
    "fracture": "B",
    "internal": "I",
    "laceration": "L",
    "stab": "L",
    "minor": "M",
    "bruis": "M",
    "abrasion": "M",
    "scrape": "M",
    "swelling": "M",
    "teeth": "T",
    "tooth": "T",
    "unconscious": "U",
    "knocked out": "U",
    "gunshot": "O",
    "serious": "O",
    "major": "O",
})


# ============================================================================
# Fuzzy-Match Fallback Keywords
# ============================================================================

# Consulted by find_best_match when no table entry scores >= 0.5.
FALLBACK_KEYWORDS = MappingProxyType({
    "location": MappingProxyType({
        "intersection": "13",
        "road": "13",
        "street": "13",
        "driveway": "20",
        "yard": "20",
        "porch": "20",
        "lot": "18",
        "garage": "18",
        "complex": "18",
        "store": "24",
        "shop": "24",
        "market": "12",
        "playground": "50",
        "recreation": "50",
        "elementary": "53",
        "credit union": "02",
        "cafe": "21",
        "diner": "21",
    }),
    "weapon": MappingProxyType({
        "gun": "11",
        "firearm": "11",
        "pistol": "12",
        "blade": "20",
        "knife": "20",
        "stick": "30",
        "rock": "30",
        "brick": "30",
        "fist": "40",
        "hand": "40",
        "punch": "40",
        "slap": "40",
        "foot": "40",
        "kick": "40",
    }),
    "property": MappingProxyType({
        "cash": "20",
        "wallet": "25",
        "purse": "25",
        "phone": "75",
        "laptop": "07",
        "bike": "04",
        "tools": "36",
        "tv": "26",
        "ring": "17",
        "necklace": "17",
    }),
})


# ============================================================================
# Phrase Sets
# ============================================================================

# Incidental facts that are never an offense in themselves.
NON_OFFENSE_PHRASES = frozenset({
    "sustained minor damage",
    "records check",
    "no crime",
    "no offense",
    "civil matter",
    "welfare check",
    "wellness check",
    "false alarm",
    "unfounded",
    "no criminal activity",
    "information only",
    "lost property",
})

# Collision vocabulary. A collision is not NIBRS-reportable on its own.
TRAFFIC_EXCLUSION_PHRASES = frozenset({
    "rear-ended",
    "rear ended",
    "collision",
    "crash",
    "fender bender",
    "bumper damage",
    "traffic accident",
    "vehicle accident",
    "car accident",
    "motor vehicle accident",
    "minor accident",
    "sideswiped",
    "side-swiped",
    "t-boned",
    "ran a red light",
    "failure to yield",
    "improper lane change",
})

IMPAIRMENT_TERMS = frozenset({
    "dui",
    "dwi",
    "under the influence",
    "intoxicated",
    "impaired",
    "drunk",
    "odor of alcohol",
    "breathalyzer",
    "field sobriety",
    "sobriety test",
    "blood alcohol",
})

RETROSPECTIVE_TERMS = frozenset({
    "prior arrest",
    "prior incident",
    "prior report",
    "prior conviction",
    "prior occasion",
    "prior contact",
    "on a prior",
    "previously",
    "records check",
    "history of",
    "in the past",
    "last year",
    "last month",
    "previous incident",
    "criminal history",
    "background check",
    "earlier incident",
})

PRESENT_ACTION_TERMS = frozenset({
    "arrived",
    "observed",
    "located",
    "responded",
    "approached",
    "is currently",
    "at the scene",
    "on scene",
    "was arrested",
    "taken into custody",
    "recovered",
    "seized",
})

CLEARED_BY_ARREST_KEYWORDS = frozenset({
    "arrested",
    "booked",
    "taken into custody",
    "placed under arrest",
    "in custody",
    "charged with",
    "was charged",
    "cited",
    "summons",
    "summoned",
})

# Removed from a narrative before the arrest keywords are checked.
NEGATED_ARREST_PHRASES = frozenset({
    "no arrest",
    "no arrests",
    "not arrested",
    "no one was arrested",
    "nobody was arrested",
    "not taken into custody",
    "no one was taken into custody",
    "nobody was taken into custody",
})

EVIDENCE_TERMS = frozenset({
    "handgun", "pistol", "revolver", "rifle", "shotgun", "firearm", "gun",
    "ammunition", "magazine", "knife", "machete", "brass knuckles",
    "marijuana", "cocaine", "heroin", "methamphetamine", "fentanyl",
    "pills", "paraphernalia", "digital scale", "syringe", "baggies",
})


# ============================================================================
# Helpers
# ============================================================================

def offense_name(code: str) -> str:
    """Official name for an offense code, or the code itself if unknown."""
    return GROUP_A_OFFENSE_NAMES.get(code) or GROUP_B_OFFENSE_NAMES.get(code) or code


def property_name(code: str) -> str:
    """Official name for a property description code."""
    return PROPERTY_CODE_NAMES.get(code, code)
