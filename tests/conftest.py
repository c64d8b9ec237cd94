"""Mini README: Shared fixtures for the courier ledger tests.

Structure:
    * snapshot_payload - one day of fleet activity in the application's field names.

The payload covers two active couriers on 2024-05-10: a partly failed
delivery, a validated and an unvalidated shipment, a validated and a pending
expense, one payment each and a stored shortage from earlier in the month.
"""

from __future__ import annotations

from typing import Any, Dict

import pytest


@pytest.fixture
def snapshot_payload() -> Dict[str, Any]:
    return {
        "couriers": [
            {"id": "l1", "name": "Awa Diop", "phone": "+225 0700000001", "active": True},
            {"id": "l2", "name": "Koffi Yao", "phone": "+225 0700000002", "active": True},
            {"id": "l3", "name": "Ancien Livreur", "phone": "", "active": False},
        ],
        "courses": [
            {
                "id": "c1",
                "type": "livraison",
                "livreurId": "l1",
                "date": "2024-05-10",
                "completed": True,
                "livraison": {
                    "contactName": "Mariam",
                    "quartier": "Cocody",
                    "deliveryFee": 300,
                    "articles": [
                        {"id": "a1", "name": "Chaussures", "price": 1000, "quantity": 2, "status": "delivered"},
                        {"id": "a2", "name": "Sac", "price": 500, "quantity": 1, "status": "not_delivered"},
                        {"id": "a4", "name": "Montre", "price": 8000, "quantity": 1, "status": "delivered"},
                    ],
                },
            },
            {
                "id": "c2",
                "type": "expedition",
                "livreurId": "l1",
                "date": "2024-05-10",
                "completed": True,
                "expedition": {"destinationCity": "Bouaké", "expeditionFee": 700, "validated": True},
            },
            {
                "id": "c3",
                "type": "livraison",
                "livreurId": "l2",
                "date": "2024-05-10",
                "completed": True,
                "livraison": {
                    "contactName": "Serge",
                    "quartier": "Abobo",
                    "deliveryFee": 0,
                    "articles": [{"id": "a3", "name": "Radio", "price": 7000, "quantity": 1, "status": "delivered"}],
                },
            },
            {
                "id": "c4",
                "type": "expedition",
                "livreurId": "l2",
                "date": "2024-05-10",
                "completed": True,
                "expedition": {"destinationCity": "Korhogo", "expeditionFee": 400, "validated": False},
            },
        ],
        "expenses": [
            {"id": "e1", "livreurId": "l1", "date": "2024-05-10", "amount": 800, "description": "Pneu", "validated": True},
            {"id": "e2", "livreurId": "l1", "date": "2024-05-10", "amount": 300, "description": "Parking", "validated": False},
        ],
        "payments": [
            {"id": "p1", "livreurId": "l1", "date": "2024-05-10", "amount": 5000, "expectedAmount": 7800},
            {"id": "p2", "livreurId": "l2", "date": "2024-05-10", "amount": 5000, "expectedAmount": 5000},
        ],
        "shortages": [
            {
                "id": "m1",
                "livreurId": "l1",
                "type": "payment_shortage",
                "amount": 1000,
                "description": "Manque de paiement: 1000 XOF",
                "date": "2024-05-03",
            }
        ],
    }
