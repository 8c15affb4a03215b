"""Built-in marketing deals.

Served alongside database records and used on their own when the database is
unreachable. Each deal carries the engine inputs for its 30-year table; the table
itself is computed on read, never hand-authored.
"""

import copy

STATIC_DEALS: list[dict] = [
    {
        "id": "napa-caymus-house-hack",
        "title": "Napa 3-Unit House Hack",
        "description": (
            "Two buildings on one lot five blocks from downtown Napa. Live in one studio "
            "while the main house and second studio rent for $5,600/month."
        ),
        "investment_strategy": "House Hack",
        "property_type": "Multi-Family",
        "address": "850 Caymus St",
        "city": "Napa",
        "state": "CA",
        "zip_code": "94559",
        "price": 825000,
        "monthly_rent": 5600,
        "is_draft": False,
        "projection_inputs": {
            "purchasePrice": 825000,
            "downPaymentAmount": 28875,
            "annualInterestRate": 6.75,
            "loanTermYears": 30,
            "grossMonthlyRent": 5600,
            "rentGrowthRate": 3,
            "vacancyRate": 5,
            "operatingExpenses": 16756,
            "expenseGrowthRate": 2.5,
            "appreciationRate": 5,
            "closingCosts": 16500,
        },
    },
    {
        "id": "tampa-lake-ave-mhp",
        "title": "10116 Lake Ave Mobile Home Park",
        "description": (
            "30 individual mobile homes on single-family lots with seller financing at "
            "5% for years 1-2 and 5.5% for years 3-4."
        ),
        "investment_strategy": "Buy & Hold",
        "property_type": "Mobile Home Park",
        "address": "10116 Lake Ave",
        "city": "Tampa",
        "state": "FL",
        "zip_code": "33619",
        "price": 3200000,
        "monthly_rent": 36442,
        "is_draft": False,
        "projection_inputs": {
            "purchasePrice": 3200000,
            "loanAmount": 1000000,
            "interestOnly": True,
            "rateTiers": [
                {"startYear": 1, "endYear": 2, "rate": 5},
                {"startYear": 3, "endYear": 4, "rate": 5.5},
            ],
            "payoffYear": 4,
            "grossMonthlyRent": 36442,
            "rentGrowthRate": 3,
            "vacancyRate": 5,
            "operatingExpenses": 129516,
            "expenseGrowthRate": 2.5,
            "appreciationRate": 3,
        },
    },
    {
        "id": "kc-garner-ave-brrrr",
        "title": "Kansas City BRRRR - Historic Northeast",
        "description": (
            "Victorian bought at a discount with hard money, refreshed for $28K and "
            "refinanced out at year 1 against a $210K after-repair value."
        ),
        "investment_strategy": "BRRRR",
        "property_type": "Single Family",
        "address": "3505 Garner Ave",
        "city": "Kansas City",
        "state": "MO",
        "zip_code": "64124",
        "price": 110000,
        "monthly_rent": 1650,
        "is_draft": False,
        "projection_inputs": {
            "purchasePrice": 110000,
            "downPaymentPercent": 10,
            "annualInterestRate": 10.45,
            "loanTermYears": 1,
            "interestOnly": True,
            "payoffYear": 1,
            "afterRepairValue": 210000,
            "rehabCosts": 28000,
            "closingCosts": 1980,
            "grossMonthlyRent": 1650,
            "rentGrowthRate": 3,
            "vacancyRate": 8,
            "operatingExpenses": {
                "managementFeeRate": 8,
                "maintenanceRate": 10,
                "capExRate": 5,
                "fixedExpenses": 3200,
            },
            "expenseGrowthRate": 2.5,
            "appreciationRate": 3.5,
        },
    },
]


def load_static_deals() -> list[dict]:
    """Fresh copies so callers can attach computed fields without touching the module data."""
    return copy.deepcopy(STATIC_DEALS)
