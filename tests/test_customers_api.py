"""
Tests for customer and doctor listing endpoints
"""
from datetime import date

import pytest
from fastapi import status

from clinic_admin.models.customer import Gender
from clinic_admin.models.user import UserRole


@pytest.fixture
async def patients(make_user):
    """Three patients, created out of name order"""
    smith = await make_user(
        UserRole.CUSTOMER,
        full_name="John Smith",
        gender=Gender.MALE,
        blood_group="O+",
        date_of_birth=date(1990, 1, 1),
    )
    baker = await make_user(
        UserRole.CUSTOMER,
        full_name="Beth Baker",
        gender=Gender.FEMALE,
        blood_group="AB-",
        medical_conditions="asthma",
    )
    able = await make_user(
        UserRole.CUSTOMER,
        full_name="Alan Able",
        gender=Gender.MALE,
        blood_group="O+",
        medical_conditions="",
    )
    return smith, baker, able


class TestListCustomers:
    """GET /api/customers"""

    @pytest.mark.parametrize("role", [UserRole.DOCTOR, UserRole.ADMIN])
    async def test_allowed_roles(self, client, make_user, headers_for, patients, role):
        viewer = await make_user(role)

        response = await client.get("/api/customers", headers=headers_for(viewer))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 3
        assert [c["full_name"] for c in data["customers"]] == ["Alan Able", "Beth Baker", "John Smith"]

    @pytest.mark.parametrize("role", [UserRole.CUSTOMER, UserRole.STAFF])
    async def test_forbidden_roles(self, client, make_user, headers_for, role):
        viewer = await make_user(role)

        response = await client.get("/api/customers", headers=headers_for(viewer))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Unauthorized to view patients list"

    async def test_record_shape(self, client, make_user, headers_for, patients):
        doctor = await make_user(UserRole.DOCTOR)

        response = await client.get("/api/customers", headers=headers_for(doctor))

        smith = response.json()["customers"][2]
        assert smith["gender"] == "male"
        assert smith["blood_group"] == "O+"
        assert smith["date_of_birth"] == "1990-01-01"
        assert "password_hash" not in smith

    async def test_search_and_filters(self, client, make_user, headers_for, patients):
        doctor = await make_user(UserRole.DOCTOR)

        response = await client.get(
            "/api/customers", params={"search": "smith"}, headers=headers_for(doctor)
        )
        assert [c["full_name"] for c in response.json()["customers"]] == ["John Smith"]

        response = await client.get(
            "/api/customers",
            params={"gender": "male", "has_conditions": "no"},
            headers=headers_for(doctor),
        )
        assert [c["full_name"] for c in response.json()["customers"]] == ["Alan Able", "John Smith"]

        response = await client.get(
            "/api/customers",
            params={"blood_group": "AB-", "registration_period": "last-week"},
            headers=headers_for(doctor),
        )
        assert response.json()["total"] == 1

    async def test_unknown_filter_value(self, client, make_user, headers_for):
        doctor = await make_user(UserRole.DOCTOR)

        response = await client.get(
            "/api/customers", params={"age_range": "100+"}, headers=headers_for(doctor)
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_stats(self, client, make_user, headers_for, patients):
        admin = await make_user(UserRole.ADMIN)

        response = await client.get("/api/customers/stats", headers=headers_for(admin))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 3
        assert data["by_gender"] == {"male": 2, "female": 1, "other": 0}
        assert data["new_this_month"] == 3
        assert sorted(data["blood_groups"]) == ["AB-", "O+"]


class TestCustomerProfile:
    """Own profile and staff edits"""

    async def test_get_and_update_own_profile(self, client, headers_for, patients):
        smith = patients[0]

        response = await client.get("/api/customers/me", headers=headers_for(smith))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["blood_group"] == "O+"

        response = await client.put(
            "/api/customers/me",
            json={"allergies": "penicillin", "weight": 82},
            headers=headers_for(smith),
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["allergies"] == "penicillin"
        assert data["weight"] == 82
        assert data["blood_group"] == "O+"

    async def test_profile_requires_customer_role(self, client, make_user, headers_for):
        doctor = await make_user(UserRole.DOCTOR)

        response = await client.get("/api/customers/me", headers=headers_for(doctor))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_staff_updates_patient(self, client, make_user, headers_for, patients):
        staff = await make_user(UserRole.STAFF)
        baker = patients[1]

        response = await client.put(
            f"/api/customers/{baker.id}",
            json={"medical_conditions": "asthma, hypertension"},
            headers=headers_for(staff),
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["medical_conditions"] == "asthma, hypertension"

    async def test_doctor_cannot_edit_patient(self, client, make_user, headers_for, patients):
        doctor = await make_user(UserRole.DOCTOR)

        response = await client.put(
            f"/api/customers/{patients[1].id}",
            json={"address": "Elsewhere"},
            headers=headers_for(doctor),
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_edit_unknown_patient(self, client, make_user, headers_for):
        staff = await make_user(UserRole.STAFF)

        response = await client.put(
            "/api/customers/9999", json={"address": "Nowhere"}, headers=headers_for(staff)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestListDoctors:
    """GET /api/doctors"""

    async def test_any_role_sees_doctors(self, client, make_user, headers_for):
        await make_user(UserRole.DOCTOR, full_name="Zoe Zeller", specialization="Neurology")
        await make_user(UserRole.DOCTOR, full_name="Adam Ames", specialization="Dermatology")
        customer = await make_user(UserRole.CUSTOMER)

        response = await client.get("/api/doctors", headers=headers_for(customer))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 2
        assert [d["full_name"] for d in data["doctors"]] == ["Adam Ames", "Zoe Zeller"]
        assert data["doctors"][0]["specialization"] == "Dermatology"

    async def test_requires_authentication(self, client):
        response = await client.get("/api/doctors")

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
