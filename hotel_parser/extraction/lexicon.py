"""Immutable lookup tables shared by the domain extractors."""

MONTHS: dict[str, int] = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sept": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

MONTH_PATTERN = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

INDIAN_CITIES: tuple[str, ...] = (
    "Mumbai", "Delhi", "New Delhi", "Bengaluru", "Bangalore", "Chennai", "Hyderabad",
    "Kolkata", "Pune", "Jaipur", "Udaipur", "Goa", "Shimla", "Agra", "Lucknow",
    "Ahmedabad", "Kochi", "Thiruvananthapuram", "Chandigarh", "Manali", "Rishikesh",
    "Varanasi", "Jodhpur", "Mussoorie", "Darjeeling", "Ooty", "Coorg", "Munnar",
    "Amritsar", "Bhopal", "Indore", "Nagpur", "Surat", "Jaisalmer", "Gurugram",
    "Noida", "Mysuru", "Alibaug", "Lonavala", "Rajasthan", "Kerala", "Gujarat",
    "Maharashtra", "Karnataka", "Tamil Nadu",
)

INTERNATIONAL_CITIES: tuple[str, ...] = (
    "Dubai", "Abu Dhabi", "Singapore", "Bangkok", "Phuket", "London", "New York",
    "Paris", "Bali", "Maldives", "Sri Lanka", "Mauritius", "Thailand", "Kathmandu",
)

HOSPITALITY_SUFFIXES: tuple[str, ...] = (
    "Hotel", "Hotels", "Resort", "Resorts", "Palace", "Inn", "Lodge", "Retreat",
    "Spa", "Suites", "Mansion", "Manor", "Villas", "Residency", "Haveli", "Fort",
)

HOSPITALITY_BRANDS: tuple[str, ...] = (
    "Taj", "Oberoi", "Trident", "ITC", "Leela", "Marriott", "JW Marriott", "Hyatt",
    "Hilton", "Radisson", "Novotel", "Sheraton", "Westin", "Ritz", "Four Seasons",
    "Vivanta", "Lemon Tree", "Fairmont", "Raffles", "Ibis", "Holiday Inn",
    "Crowne Plaza", "St. Regis", "Le Meridien", "Courtyard", "Hyatt Regency",
    "Sofitel", "Accor", "Welcomhotel", "Fortune", "Club Mahindra", "Aman",
)

# Function spaces inside a property; never a property name on their own.
FACILITY_SUFFIXES: tuple[str, ...] = (
    "Ballroom", "Hall", "Lawn", "Lawns", "Terrace", "Room", "Suite", "Pavilion",
    "Garden", "Gardens", "Lounge", "Courtyard", "Banquet", "Poolside", "Deck",
)

NAMED_COLORS: dict[str, str] = {
    "rose gold": "#B76E79",
    "navy blue": "#001F5B",
    "royal blue": "#2E3B8C",
    "sky blue": "#87CEEB",
    "baby blue": "#89CFF0",
    "teal": "#008080",
    "turquoise": "#40E0D0",
    "maroon": "#800000",
    "burgundy": "#800020",
    "crimson": "#DC143C",
    "scarlet": "#FF2400",
    "ivory": "#FFFFF0",
    "cream": "#FFFDD0",
    "champagne": "#F7E7CE",
    "gold": "#D4AF37",
    "golden": "#DAA520",
    "silver": "#C0C0C0",
    "copper": "#B87333",
    "bronze": "#CD7F32",
    "blush": "#DE5D83",
    "peach": "#FFCBA4",
    "coral": "#FF7F50",
    "salmon": "#FA8072",
    "mauve": "#E0B0FF",
    "lavender": "#E6E6FA",
    "lilac": "#C8A2C8",
    "plum": "#8E4585",
    "purple": "#800080",
    "wine": "#722F37",
    "sage": "#B2AC88",
    "mint": "#98FB98",
    "emerald": "#50C878",
    "forest green": "#228B22",
    "olive": "#808000",
    "charcoal": "#36454F",
    "slate": "#708090",
    "dusty rose": "#DCAE96",
    "magenta": "#FF00FF",
    "fuchsia": "#FF00FF",
    "white": "#FFFFFF",
    "black": "#000000",
    "red": "#FF0000",
    "blue": "#0000FF",
    "green": "#008000",
    "pink": "#FFC0CB",
    "orange": "#FFA500",
    "yellow": "#FFD700",
}
