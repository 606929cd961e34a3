"""
Hospitals, doctors and patients.
"""


def create_hospital(client, name="RS Harapan"):
    response = client.post(
        "/api/hospital/",
        json={"hospitalname": name, "city": "Jakarta", "phonenumber": "0215550000"},
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestHospitalEndpoints:
    def test_crud(self, client):
        hospital = create_hospital(client)
        assert hospital["hospitalname"] == "RS Harapan"

        response = client.put(
            f"/api/hospital/{hospital['id_hospital']}",
            json={"hospitalname": "RS Harapan Kita"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["hospitalname"] == "RS Harapan Kita"
        assert response.json()["data"]["city"] is None

        assert len(client.get("/api/hospital/").json()["data"]) == 1
        assert client.delete(f"/api/hospital/{hospital['id_hospital']}").status_code == 200
        assert client.get(f"/api/hospital/{hospital['id_hospital']}").status_code == 404


class TestDoctorEndpoints:
    def test_create_and_fetch(self, client):
        hospital = create_hospital(client)
        response = client.post(
            "/api/doctor/",
            json={
                "id_hospital": hospital["id_hospital"],
                "doctorname": "dr. Rina",
                "specialization": "Hematology",
            },
        )
        assert response.status_code == 201
        doctor = response.json()["data"]

        fetched = client.get(f"/api/doctor/{doctor['id_doctor']}").json()["data"]
        assert fetched["doctorname"] == "dr. Rina"
        assert fetched["id_hospital"] == hospital["id_hospital"]

    def test_missing_doctor_message(self, client):
        response = client.get("/api/doctor/99")
        assert response.status_code == 404
        assert response.json()["message"] == "No Doctor with id : 99 found."


class TestPatientEndpoints:
    def test_fullname_is_computed(self, client):
        response = client.post(
            "/api/patient/",
            json={
                "firstname": "Siti",
                "lastname": "Aminah",
                "bloodtype": "B",
                "rhesus": "+",
                "dateofbirth": "1990-05-01",
                "gender": "F",
            },
        )
        assert response.status_code == 201
        patient = response.json()["data"]
        assert patient["fullname"] == "Siti Aminah"

        listed = client.get("/api/patient/").json()["data"]
        assert listed[0]["fullname"] == "Siti Aminah"

    def test_fullname_without_last_name(self, client):
        patient = client.post("/api/patient/", json={"firstname": "Joko"}).json()["data"]
        assert patient["fullname"] == "Joko"

    def test_update_and_delete(self, client):
        patient = client.post("/api/patient/", json={"firstname": "Joko"}).json()["data"]

        response = client.put(
            f"/api/patient/{patient['id_patient']}",
            json={"firstname": "Joko", "lastname": "Widodo"},
        )
        assert response.json()["data"]["fullname"] == "Joko Widodo"

        deleted = client.delete(f"/api/patient/{patient['id_patient']}").json()["data"]
        assert deleted["id_patient"] == patient["id_patient"]
        assert client.get(f"/api/patient/{patient['id_patient']}").status_code == 404
