import json

from dbimport.importing.job import ImportingJob, importing_manager


CONTROLLER = "/api/v1/importing/database-import-controller"


def new_job(client):
    response = client.post("/api/v1/importing/jobs")
    assert response.status_code == 201
    return response.json()["jobID"]


def test_get_is_not_implemented(client):
    response = client.get(CONTROLLER)
    assert response.json() == {"status": "error", "message": "GET not implemented"}


def test_unknown_sub_command(client):
    response = client.post(CONTROLLER, params={"subCommand": "explode"})
    assert response.json() == {"status": "error", "message": "No such sub command"}


def test_initialize_parser_ui(client):
    response = client.post(CONTROLLER, params={"subCommand": "initialize-parser-ui"})
    body = response.json()

    assert body["status"] == "ok"
    assert body["options"] == {"skipDataLines": 0, "storeBlankRows": True, "storeBlankCellsAsNulls": True}


def test_preview_requires_a_job(client, import_params):
    response = client.post(CONTROLLER, params={"subCommand": "parse-preview", "jobID": "12"}, data=import_params)
    assert response.json() == {"status": "error", "message": "No such import job"}


def test_preview_requires_query_info(client, import_params):
    job_id = new_job(client)
    del import_params["databaseUser"]

    response = client.post(CONTROLLER, params={"subCommand": "parse-preview", "jobID": job_id}, data=import_params)
    assert response.json() == {"status": "error", "message": "Invalid or missing Query Info"}


def test_preview_rejects_bad_options(client, import_params):
    job_id = new_job(client)
    import_params["options"] = "[1, 2]"

    response = client.post(CONTROLLER, params={"subCommand": "parse-preview", "jobID": job_id}, data=import_params)
    assert response.json()["message"].startswith("Invalid options")


def test_preview_fills_the_job(client, import_params):
    job_id = new_job(client)
    import_params["options"] = json.dumps({"storeBlankRows": False})

    response = client.post(CONTROLLER, params={"subCommand": "parse-preview", "jobID": job_id}, data=import_params)
    assert response.json() == {"status": "ok"}

    job = client.get(f"/api/v1/importing/jobs/{job_id}").json()
    assert job["state"] == "new"
    assert job["updating"] is False
    assert job["preview"]["columns"] == ["id", "name", "salary", "notes"]
    assert job["preview"]["rowCount"] == 6
    assert job["preview"]["rows"][0] == ["1", "Alice", "5000.5", "a"]
    assert job["metadata"]["source"] == import_params["initialDatabase"]


def test_preview_reports_database_errors(client, import_params):
    job_id = new_job(client)
    import_params["query"] = "SELECT * FROM nowhere"

    response = client.post(CONTROLLER, params={"subCommand": "parse-preview", "jobID": job_id}, data=import_params)
    body = response.json()

    assert body["status"] == "error"
    assert "nowhere" in body["message"]


def test_preview_unsupported_database(client, import_params):
    job_id = new_job(client)
    import_params["databaseType"] = "oracle"

    response = client.post(CONTROLLER, params={"subCommand": "parse-preview", "jobID": job_id}, data=import_params)
    assert response.json() == {"status": "error", "message": "Database type oracle is not supported"}


def test_create_project(client, import_params):
    job_id = new_job(client)
    import_params["options"] = json.dumps({"projectName": "Employees", "storeBlankRows": False})

    response = client.post(CONTROLLER, params={"subCommand": "create-project", "jobID": job_id}, data=import_params)
    assert response.json() == {"status": "ok", "message": "done"}

    job = client.get(f"/api/v1/importing/jobs/{job_id}").json()
    assert job["state"] == ImportingJob.STATE_CREATED_PROJECT
    assert job["errors"] == []
    project_id = job["projectID"]

    project = client.get(f"/api/v1/projects/{project_id}").json()
    assert project["name"] == "Employees"
    assert project["row_count"] == 6
    assert project["columns"] == ["id", "name", "salary", "notes"]

    rows = client.get(f"/api/v1/projects/{project_id}/rows", params={"skip": 4, "limit": 10}).json()
    assert rows["total"] == 6
    assert [row["cells"][1] for row in rows["rows"]] == ["Frank", "Grace"]

    assert client.delete(f"/api/v1/projects/{project_id}").status_code == 204
    assert client.get(f"/api/v1/projects/{project_id}").status_code == 404


def test_create_project_with_bad_query(client, import_params):
    job_id = new_job(client)
    import_params["query"] = "SELECT * FROM nowhere"

    response = client.post(CONTROLLER, params={"subCommand": "create-project", "jobID": job_id}, data=import_params)
    assert response.json() == {"status": "ok", "message": "done"}

    job = client.get(f"/api/v1/importing/jobs/{job_id}").json()
    assert job["state"] == ImportingJob.STATE_ERROR
    assert job["projectID"] is None
    assert "nowhere" in job["errors"][0]["message"]


def test_job_lifecycle(client):
    job_id = new_job(client)

    response = client.post(f"/api/v1/importing/jobs/{job_id}/cancel")
    assert response.json() == {"jobID": job_id, "canceled": True}
    assert importing_manager.get_job(job_id).canceled

    assert client.delete(f"/api/v1/importing/jobs/{job_id}").status_code == 204
    assert client.get(f"/api/v1/importing/jobs/{job_id}").status_code == 404
    assert client.delete(f"/api/v1/importing/jobs/{job_id}").status_code == 404
