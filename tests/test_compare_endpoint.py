import pytest
from fastapi.testclient import TestClient

from taxcompare.main import app

client = TestClient(app)


def test_post_compare_reference_scenario():
    response = client.post("/compare", json={"income": 200000, "expenses": 100000})
    assert response.status_code == 200
    body = response.json()

    assert body["jurisdiction"] == "MB-2024"
    assert body["province"] == "Manitoba"
    assert body["tax_year"] == 2024

    personal = body["personal"]
    assert personal["taxable_income"] == 199162.0
    assert personal["federal_tax"] == 40371.51
    assert personal["provincial_tax"] == 27120.2
    assert personal["cpp"] == {"base_tier": 3867.5, "second_tier": 188.0, "total": 4055.5}
    assert personal["ei"] == 1049.12
    assert personal["total_tax"] == 72596.33
    assert personal["effective_rate"] == "36.30"

    corporate = body["corporate"]
    assert corporate["corporate_tax"] == 22000.0
    assert corporate["salary"] == 100000.0
    assert corporate["retained_earnings"] == 78000.0
    assert corporate["net_income"] == 148934.02
    assert corporate["effective_rate"] == "25.53"
    assert corporate["corporate_breakdown"][0]["label"] == "Active business income"

    assert body["advantage"] == {"amount": 21530.34, "share_of_income": 10.8, "favours": "corporate"}


def test_post_compare_accepts_aliases_and_currency_text():
    response = client.post(
        "/compare",
        json={"grossIncome": "$200,000", "personalExpenses": "$100,000", "includeEi": True, "selfEmployed": False},
    )
    assert response.status_code == 200
    assert response.json()["advantage"]["amount"] == 21530.34


def test_post_compare_uses_default_draw_when_expenses_missing():
    response = client.post("/compare", json={"income": 200000})
    assert response.status_code == 200
    body = response.json()
    assert body["inputs"]["expenses"] == 100000.0
    assert body["corporate"]["salary"] == 100000.0


def test_post_compare_self_employed_without_ei():
    response = client.post("/compare", json={"income": 200000, "self_employed": True, "include_ei": False})
    body = response.json()
    assert body["personal"]["cpp"]["total"] == 8111.0
    assert body["personal"]["ei"] == 0.0
    assert body["corporate"]["cpp"]["total"] == 4055.5
    assert body["inputs"]["self_employed"] is True


@pytest.mark.parametrize(
    "payload",
    [
        {"income": -1},
        {"income": 1000, "expenses": -5},
        {"income": 1000, "province": "MB"},
    ],
)
def test_post_compare_rejects_invalid_payload(payload):
    response = client.post("/compare", json=payload)
    assert response.status_code == 422


def test_unknown_jurisdiction_returns_400():
    response = client.post("/compare", json={"income": 1000, "jurisdiction": "XX-2024"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Unsupported jurisdiction XX-2024"}


def test_get_compare_with_query_params():
    response = client.get(
        "/compare",
        params={"income": "$200,000", "expenses": "100,000", "include_ei": "true", "jurisdiction": "mb-2024"},
    )
    assert response.status_code == 200
    assert response.json()["advantage"]["favours"] == "corporate"


def test_get_compare_zero_income_is_neutral():
    response = client.get("/compare", params={"income": ""})
    assert response.status_code == 200
    body = response.json()
    assert body["advantage"] == {"amount": None, "share_of_income": None, "favours": "none"}
    assert body["personal"]["effective_rate"] == "0.00"
    assert body["corporate"]["corporate_breakdown"] == []


def test_get_compare_very_long_income_still_renders():
    income = "9" * 30
    response = client.get("/compare", params={"income": income})
    assert response.status_code == 200
    body = response.json()
    assert body["personal"]["gross_income"] == float(income)
    assert body["personal"]["effective_rate"] == "50.40"
    assert body["advantage"]["favours"] in {"corporate", "personal"}

    page = client.get("/ui/", params={"income": income, "submitted": "1"})
    assert page.status_code == 200
    assert "$999,999,999,999,999,999,999,999,999,999" in page.text


def test_health_lists_jurisdictions():
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["jurisdiction"] == "MB-2024"
    assert body["jurisdictions"] == ["MB-2024"]
