"""Integration tests for message endpoints."""

from fastapi import status

from src.db.connection import WriteResult


class TestSendMessages:
    """Test the three message channels."""

    def test_private_message(self, test_client, fake_store):
        fake_store.write_result = WriteResult(last_insert_id=21, rows_affected=1)

        response = test_client.post(
            "/api/messages/private",
            json={"content": "Hi", "sender_id": 1, "receiver_id": 2}
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {"id": 21, "content": "Hi", "sender_id": 1, "receiver_id": 2}
        assert fake_store.calls == [(
            "execute_write",
            "INSERT INTO messages (content, sender_id, receiver_id) VALUES (?, ?, ?)",
            ["Hi", 1, 2]
        )]

    def test_group_message(self, test_client, fake_store):
        response = test_client.post(
            "/api/messages/group",
            json={"content": "Standup at 10", "sender_id": 1, "department_id": 5}
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert fake_store.calls[0][1] == (
            "INSERT INTO messages (content, sender_id, department_id) VALUES (?, ?, ?)"
        )

    def test_support_message(self, test_client, fake_store):
        response = test_client.post(
            "/api/messages/support",
            json={"content": "Need help", "sender_id": 1, "company_id": 4}
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["company_id"] == 4
        assert fake_store.calls[0][2] == ["Need help", 1, None, 4]

    def test_private_requires_receiver(self, test_client, fake_store):
        response = test_client.post("/api/messages/private", json={"content": "Hi", "sender_id": 1})

        assert response.status_code == 422
        assert fake_store.calls == []


class TestSupportConversation:
    """Test listing, editing and removing support messages."""

    def test_list_company_messages(self, test_client, fake_store):
        fake_store.rows = [
            {"id": 1, "content": "Need help", "company_id": 4},
            {"id": 2, "content": "On it", "company_id": 4}
        ]

        response = test_client.get("/api/messages/support/list/4")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == fake_store.rows
        assert fake_store.calls == [(
            "query_all",
            "SELECT * FROM messages WHERE company_id = ? ORDER BY created_at ASC",
            [4]
        )]

    def test_update_support_message(self, test_client, fake_store):
        response = test_client.put("/api/messages/support/2", json={"content": "Fixed"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Message updated successfully"}
        assert fake_store.calls == [(
            "execute_write",
            "UPDATE messages SET content = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            ["Fixed", 2]
        )]

    def test_update_missing_message(self, test_client, fake_store):
        fake_store.write_result = WriteResult(rows_affected=0)

        response = test_client.put("/api/messages/support/2", json={"content": "Fixed"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Message not found"

    def test_delete_support_message(self, test_client, fake_store):
        response = test_client.delete("/api/messages/support/2")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Message deleted successfully"}

    def test_delete_missing_message(self, test_client, fake_store):
        fake_store.write_result = WriteResult(rows_affected=0)

        response = test_client.delete("/api/messages/support/2")

        assert response.status_code == status.HTTP_404_NOT_FOUND
