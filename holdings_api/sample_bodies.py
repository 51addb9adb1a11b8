"""
Minimal valid request bodies for every resource (required fields only).

Shared by the API tests and the smoke script.
"""

from typing import Dict

USER_A = "user-a"
USER_B = "user-b"

VALID_BODIES: Dict[str, Dict] = {
    "/api/land": {
        "name": "North Farm",
        "location": "Story County, IA",
        "area": 120,
        "value": 100000,
        "acquisitionDate": "2024-01-15",
    },
    "/api/labour": {
        "employeeName": "Ada Lovelace",
        "position": "Engineer",
        "department": "R&D",
        "salary": 90000,
        "hireDate": "2023-06-01",
    },
    "/api/capital": {
        "name": "Operating reserve",
        "type": "cash",
        "category": "liquid",
        "amount": 20000,
        "acquisitionDate": "2024-02-01",
    },
    "/api/technology": {
        "name": "CRM",
        "type": "software",
        "category": "sales",
        "purchaseDate": "2024-03-01",
        "purchasePrice": 5000,
    },
    "/api/information": {
        "title": "Regional market study",
        "category": "market-research",
        "type": "report",
        "acquisitionDate": "2024-01-10",
    },
    "/api/businesses": {
        "name": "Corner Bakery",
        "industry": "Food",
        "establishedDate": "2020-05-01",
        "ownershipPercentage": 60,
        "investmentAmount": 10000,
        "currentValue": 15000,
    },
    "/api/content": {
        "title": "Launch video",
        "contentType": "video",
        "platform": "YouTube",
        "publicationDate": "2024-04-01T10:00:00Z",
    },
}

RESOURCE_PATHS = list(VALID_BODIES)
