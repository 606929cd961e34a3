"""
Blood request endpoints, including resolution through PUT.
"""


class TestRequestEndpoints:
    def test_create_stamps_requested_at(self, client, factory):
        response = client.post("/api/request/", json=factory.request_data())
        assert response.status_code == 201

        data = response.json()["data"]
        assert data["status"] == 0
        assert data["requestedat"] is not None

    def test_create_rejects_resolved_status(self, client, factory):
        response = client.post("/api/request/", json=factory.request_data(status=1))
        assert response.status_code == 400
        assert client.get("/api/request/").json()["data"] == []
        assert client.get("/api/confirmed/").json()["data"] == []

    def test_list_and_get(self, client, factory):
        created = client.post("/api/request/", json=factory.request_data()).json()["data"]

        listed = client.get("/api/request/").json()["data"]
        assert [row["id_request"] for row in listed] == [created["id_request"]]

        fetched = client.get(f"/api/request/{created['id_request']}")
        assert fetched.status_code == 200
        detail = fetched.json()["data"]
        assert {key: detail[key] for key in created} == created
        assert detail["patient_name"] is None
        assert detail["doctorname"] is None
        assert detail["hospital_name"] is None

    def test_update_pending_request(self, client, factory):
        created = client.post("/api/request/", json=factory.request_data()).json()["data"]

        response = client.put(
            f"/api/request/{created['id_request']}",
            json=factory.request_data(quantity=4),
        )
        assert response.status_code == 200
        assert response.json()["data"]["quantity"] == 4
        assert len(client.get("/api/request/").json()["data"]) == 1

    def test_approve_archives_request(self, client, factory):
        created = client.post("/api/request/", json=factory.request_data()).json()["data"]

        response = client.put(
            f"/api/request/{created['id_request']}",
            json=factory.request_data(status=1),
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == 1

        assert client.get("/api/request/").json()["data"] == []
        assert client.get(f"/api/request/{created['id_request']}").status_code == 404

        confirmed = client.get("/api/confirmed/").json()["data"]
        assert len(confirmed) == 1
        assert confirmed[0]["id_request"] == created["id_request"]

    def test_update_missing_request(self, client, factory):
        response = client.put("/api/request/31", json=factory.request_data(status=1))
        assert response.status_code == 404
        assert client.get("/api/confirmed/").json()["data"] == []

    def test_delete(self, client, factory):
        created = client.post("/api/request/", json=factory.request_data()).json()["data"]

        assert client.delete(f"/api/request/{created['id_request']}").status_code == 200
        assert client.delete(f"/api/request/{created['id_request']}").status_code == 404

    def test_details_resolve_names(self, client, factory):
        hospital = client.post(
            "/api/hospital/", json={"hospitalname": "RS Sehat"}
        ).json()["data"]
        doctor = client.post(
            "/api/doctor/",
            json={"id_hospital": hospital["id_hospital"], "doctorname": "dr. Bayu"},
        ).json()["data"]
        patient = client.post(
            "/api/patient/", json={"firstname": "Dewi", "lastname": "Lestari"}
        ).json()["data"]
        client.post(
            "/api/request/",
            json=factory.request_data(
                id_patient=patient["id_patient"], id_doctor=doctor["id_doctor"]
            ),
        )
        # Request without references still shows up
        client.post("/api/request/", json=factory.request_data())

        response = client.get("/api/request/details")
        assert response.status_code == 200
        first, second = response.json()["data"]
        assert first["patient_name"] == "Dewi Lestari"
        assert first["doctorname"] == "dr. Bayu"
        assert first["hospital_name"] == "RS Sehat"
        assert second["patient_name"] is None
        assert second["hospital_name"] is None

    def test_list_and_get_resolve_names(self, client, factory):
        hospital = client.post(
            "/api/hospital/", json={"hospitalname": "RS Medika"}
        ).json()["data"]
        doctor = client.post(
            "/api/doctor/",
            json={"id_hospital": hospital["id_hospital"], "doctorname": "dr. Sari"},
        ).json()["data"]
        patient = client.post(
            "/api/patient/", json={"firstname": "Rina"}
        ).json()["data"]
        created = client.post(
            "/api/request/",
            json=factory.request_data(
                id_patient=patient["id_patient"], id_doctor=doctor["id_doctor"]
            ),
        ).json()["data"]

        listed = client.get("/api/request/").json()["data"]
        fetched = client.get(f"/api/request/{created['id_request']}").json()["data"]

        assert listed == [fetched]
        assert fetched["patient_name"] == "Rina"
        assert fetched["doctorname"] == "dr. Sari"
        assert fetched["hospital_name"] == "RS Medika"
