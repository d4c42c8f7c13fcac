"""
Tests del endpoint que recibe eventos de producto.
"""
import json

import redis


def test_valid_event_is_queued(test_client, mock_queue, make_event):
    event = make_event(languages=["en_US", "es_ES"])

    response = test_client.post("/products/", json=event)

    assert response.status_code == 200
    assert response.json()["message"] == "Producto encolado con éxito"
    mock_queue.client.rpush.assert_called_once()
    assert json.loads(mock_queue.client.rpush.call_args[0][1]) == event


def test_delete_event_is_queued(test_client, mock_queue, make_event):
    response = test_client.post("/products/", json=make_event(action="delete"))

    assert response.status_code == 200
    assert response.json()["action"] == "delete"


def test_empty_object_is_rejected(test_client, mock_queue):
    response = test_client.post("/products/", json={})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("No se ha podido procesar el producto")
    mock_queue.client.rpush.assert_not_called()


def test_string_numbers_are_rejected(test_client, mock_queue, make_event):
    event = make_event()
    event["backend_id"] = "7"

    response = test_client.post("/products/", json=event)

    assert response.status_code == 400
    mock_queue.client.rpush.assert_not_called()


def test_invalid_json_is_rejected(test_client, mock_queue):
    response = test_client.post(
        "/products/", content=b"{no es json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    mock_queue.client.rpush.assert_not_called()


def test_missing_payload_is_rejected(test_client, mock_queue, make_event):
    event = make_event(languages=["en_US", "es_ES"])
    del event["es_ES"]

    response = test_client.post("/products/", json=event)

    assert response.status_code == 400
    assert response.json()["detail"] == (
        "No se ha podido procesar el producto: El campo es_ES es obligatorio"
    )
    mock_queue.client.rpush.assert_not_called()


def test_unlisted_payload_is_rejected(test_client, mock_queue, make_event):
    event = make_event(languages=["es_ES"])
    event["en_US"] = make_event()["en_US"]

    response = test_client.post("/products/", json=event)

    assert response.status_code == 400
    assert "El campo en_US no debería existir" in response.json()["detail"]


def test_queue_failure_returns_500(test_client, mock_queue, make_event):
    mock_queue.client.rpush.side_effect = redis.ConnectionError("Connection refused")

    response = test_client.post("/products/", json=make_event())

    assert response.status_code == 500
    assert response.json()["detail"] == (
        "No se ha podido encolar el producto: Connection refused"
    )


def test_health_check(test_client, mock_queue):
    mock_queue.client.ping.return_value = True
    mock_queue.client.llen.return_value = 3

    response = test_client.get("/products/health")

    assert response.status_code == 200
    assert response.json()["pending"] == 3


def test_health_check_queue_down(test_client, mock_queue):
    mock_queue.client.ping.side_effect = redis.ConnectionError("down")

    response = test_client.get("/products/health")

    assert response.status_code == 503
