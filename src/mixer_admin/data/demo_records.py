"""
Demo fixtures for the in-memory backend.

Records use the same field names as the REST API so the demo backend can
serve them unchanged.
"""

from datetime import date, timedelta

_CITIES = ["Pune", "Mumbai", "Nashik", "Nagpur", "Aurangabad", "Kolhapur"]
_COMPANIES = [
    ("Shree Ganesh Builders", "Rahul Patil", "27AAPFS1234K1Z5"),
    ("Skyline Constructions", "Meera Joshi", None),
    ("Deccan Infra Projects", "Amit Kulkarni", "27AACCD5678L1Z2"),
    ("Sahyadri Developers", "Priya Deshmukh", None),
    ("Om Sai Contractors", "Sanjay Shinde", "27ABCFO9012M1Z8"),
    ("Green Valley Homes", "Neha Pawar", None),
    ("Metro Road Works", "Vikas Jadhav", "27AAKFM3456N1Z1"),
    ("Krishna Infrastructure", "Anita More", None),
    ("Vishwa Buildcon", "Rohit Gaikwad", "27AADFV7890P1Z4"),
    ("Lakshmi Estates", "Kavita Bhosale", None),
    ("Royal Civil Works", "Manoj Chavan", None),
    ("Sunrise Realtors", "Pooja Salunkhe", "27AAHFS2345Q1Z6"),
]

_BASE_DATE = date(2024, 1, 1)


def _iso(day: date) -> str:
    return f"{day.isoformat()}T10:00:00.000Z"


DEMO_CUSTOMERS = [
    {
        "id": index,
        "company_name": company,
        "contact_person": contact,
        "email": f"{contact.split()[0].lower()}@{company.split()[0].lower()}.in",
        "phone": f"98{index:02d}0{index:02d}1234"[:10],
        "address": f"{index * 11} Station Road, {_CITIES[index % len(_CITIES)]}",
        "city": _CITIES[index % len(_CITIES)],
        "site_location": f"Site {index}, {_CITIES[index % len(_CITIES)]}",
        "gst_number": gst,
        "created_at": _iso(_BASE_DATE + timedelta(days=index * 9)),
    }
    for index, (company, contact, gst) in enumerate(_COMPANIES, start=1)
]

DEMO_MACHINES = [
    {
        "id": index,
        "machine_number": f"CM-{index:03d}",
        "name": name,
        "capacity": capacity,
        "price_per_day": day_rate,
        "price_per_week": day_rate * 6,
        "price_per_month": day_rate * 22,
        "is_active": index != 5,
        "created_at": _iso(_BASE_DATE + timedelta(days=index)),
    }
    for index, (name, capacity, day_rate) in enumerate(
        [
            ("Half Bag Mixer", "0.5 bag", 1200),
            ("One Bag Mixer", "1 bag", 1800),
            ("Hydraulic Mixer", "1 bag", 2500),
            ("Self Loading Mixer", "1.5 cum", 6500),
            ("Transit Mixer", "6 cum", 9000),
            ("Reversible Drum Mixer", "0.28 cum", 3200),
        ],
        start=1,
    )
]

_STATUSES = ["draft", "sent", "accepted", "rejected", "expired"]
_DELIVERY = ["pending", "delivered", "completed", "cancelled"]


def _quotation(index: int) -> dict:
    customer = DEMO_CUSTOMERS[index % len(DEMO_CUSTOMERS)]
    machine = DEMO_MACHINES[index % len(DEMO_MACHINES)]
    days = 3 + index % 10
    subtotal = machine["price_per_day"] * days
    gst_amount = round(subtotal * 0.18, 2)
    created = _BASE_DATE + timedelta(days=index * 4)
    return {
        "id": index,
        "quotation_number": f"QT-2024-{index:04d}",
        "customer_id": customer["id"],
        "customer_name": customer["company_name"],
        "customer_contact": customer["phone"],
        "customer_gst_number": customer["gst_number"],
        "machine_id": machine["id"],
        "quotation_status": _STATUSES[index % len(_STATUSES)],
        "delivery_status": _DELIVERY[index % len(_DELIVERY)],
        "items": [
            {
                "item_type": "machine",
                "description": machine["name"],
                "quantity": days,
                "unit_price": machine["price_per_day"],
            }
        ],
        "subtotal": subtotal,
        "gst_amount": gst_amount,
        "grand_total": subtotal + gst_amount,
        "quotation_date": created.isoformat(),
        "created_at": _iso(created),
    }


DEMO_QUOTATIONS = [_quotation(index) for index in range(1, 46)]

DEMO_SERVICE_RECORDS = [
    {
        "id": index,
        "machine_id": DEMO_MACHINES[index % len(DEMO_MACHINES)]["id"],
        "machine_number": DEMO_MACHINES[index % len(DEMO_MACHINES)]["machine_number"],
        "service_date": (_BASE_DATE + timedelta(days=index * 12)).isoformat(),
        "engine_hours": 120 + index * 35,
        "operator": ["Ramesh", "Suresh", "Ganesh"][index % 3],
        "site_location": DEMO_CUSTOMERS[index % len(DEMO_CUSTOMERS)]["site_location"],
        "category": ["Engine", "Drum", "Hydraulics", "General"][index % 4],
        "notes": "Routine maintenance",
        "created_at": _iso(_BASE_DATE + timedelta(days=index * 12)),
    }
    for index in range(1, 19)
]

DEMO_SERVICE_CATEGORIES = [
    {"id": index, "name": name}
    for index, name in enumerate(["Engine", "Drum", "Hydraulics", "General"], start=1)
]

DEMO_TERMS = [
    {
        "id": index,
        "title": title,
        "description": description,
        "category": category,
        "is_default": index <= 4,
        "display_order": index,
        "created_at": _iso(_BASE_DATE),
    }
    for index, (title, description, category) in enumerate(
        [
            ("Payment", "50% advance, balance before dispatch.", "payment"),
            ("Transport", "Transport charges extra at actuals.", "delivery"),
            ("Fuel", "Diesel to be provided by the customer.", "operation"),
            ("Operator", "Operator charges included for 8 hours per day.", "operation"),
            ("Damage", "Damage at site will be charged to the customer.", "liability"),
            ("Validity", "Quotation valid for 15 days.", "general"),
            ("Taxes", "GST 18% applicable.", "payment"),
        ],
        start=1,
    )
]

DEMO_COMPANY = {
    "id": 1,
    "company_name": "Mixer Rentals Pvt Ltd",
    "email": "office@mixerrentals.in",
    "phone": "9876543210",
    "address": "Plot 12, MIDC Bhosari, Pune 411026",
    "gst_number": "27AAACM1234A1Z5",
    "logo_url": None,
    "signature_url": None,
}
