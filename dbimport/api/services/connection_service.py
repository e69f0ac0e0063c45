"""Saved connection service: named database connections with encrypted passwords."""
import logging
import uuid
from typing import List, Optional

from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy.orm import Session

from dbimport.api.db.models import SavedConnection
from dbimport.api.models.database import SavedConnectionCreate, SavedConnectionUpdate, SavedConnectionResponse
from dbimport.connectors.schemas import DatabaseConfiguration
from dbimport.core.config import settings


logger = logging.getLogger(__name__)

# Without a configured key, passwords saved by this process can't be read after a restart
_process_key = Fernet.generate_key()


class SavedConnectionError(Exception):
    pass


class SavedConnectionExists(SavedConnectionError):
    pass


class SavedConnectionService:
    """Service for managing saved connections."""

    def __init__(self, db: Session):
        self.db = db
        encryption_key = settings.DATASOURCE_ENCRYPTION_KEY or _process_key
        if isinstance(encryption_key, str):
            encryption_key = encryption_key.encode()
        self.cipher = Fernet(encryption_key)

    def _encrypt_password(self, password: Optional[str]) -> Optional[str]:
        """Encrypt password for storage."""
        if password is None:
            return None
        return self.cipher.encrypt(password.encode()).decode()

    def _decrypt_password(self, encrypted_password: Optional[str]) -> Optional[str]:
        """Decrypt password from storage."""
        if not encrypted_password:
            return None
        try:
            return self.cipher.decrypt(encrypted_password.encode()).decode()
        except InvalidToken:
            raise SavedConnectionError("Saved password can't be decrypted with the configured key")

    def get(self, connection_name: str) -> Optional[SavedConnection]:
        return self.db.query(SavedConnection).filter(
            SavedConnection.connection_name == connection_name
        ).first()

    def list_connections(self) -> List[SavedConnectionResponse]:
        """All saved connections, without passwords."""
        connections = self.db.query(SavedConnection).order_by(SavedConnection.connection_name).all()
        return [self._to_response(connection, include_password=False) for connection in connections]

    def get_connection(self, connection_name: str) -> Optional[SavedConnectionResponse]:
        """One saved connection with its decrypted password."""
        connection = self.get(connection_name)
        if not connection:
            return None
        return self._to_response(connection, include_password=True)

    def get_configuration(self, connection_name: str) -> Optional[DatabaseConfiguration]:
        connection = self.get(connection_name)
        if not connection:
            return None
        return DatabaseConfiguration(
            connection_name=connection.connection_name,
            database_type=connection.database_type,
            database_host=connection.database_host,
            database_port=connection.database_port or 0,
            database_user=connection.database_user,
            database_password=self._decrypt_password(connection.password_encrypted),
            database_name=connection.database_name,
            database_schema=connection.database_schema,
            use_ssl=bool(connection.use_ssl),
        )

    def add_connection(self, request: SavedConnectionCreate) -> SavedConnectionResponse:
        if self.get(request.connection_name):
            raise SavedConnectionExists(f"Connection {request.connection_name} already exists")

        connection = SavedConnection(
            id=str(uuid.uuid4()),
            connection_name=request.connection_name,
            database_type=request.database_type,
            database_host=request.database_host,
            database_port=request.database_port or 0,
            database_user=request.database_user,
            password_encrypted=self._encrypt_password(request.database_password),
            database_name=request.database_name,
            database_schema=request.database_schema,
            use_ssl=request.use_ssl,
        )
        self.db.add(connection)
        self.db.commit()
        self.db.refresh(connection)

        logger.info(f"Saved connection {connection.connection_name}")
        return self._to_response(connection, include_password=False)

    def edit_connection(self, connection_name: str,
                        update_data: SavedConnectionUpdate) -> Optional[SavedConnectionResponse]:
        connection = self.get(connection_name)
        if not connection:
            return None

        update_dict = update_data.model_dump(exclude_unset=True)

        # Handle password encryption
        if 'database_password' in update_dict:
            update_dict['password_encrypted'] = self._encrypt_password(update_dict.pop('database_password'))

        for key, value in update_dict.items():
            setattr(connection, key, value)

        self.db.commit()
        self.db.refresh(connection)

        logger.info(f"Updated saved connection {connection_name}")
        return self._to_response(connection, include_password=False)

    def delete_connection(self, connection_name: str) -> bool:
        connection = self.get(connection_name)
        if not connection:
            return False

        self.db.delete(connection)
        self.db.commit()
        logger.info(f"Deleted saved connection {connection_name}")
        return True

    def _to_response(self, connection: SavedConnection, include_password: bool) -> SavedConnectionResponse:
        return SavedConnectionResponse(
            connection_name=connection.connection_name,
            database_type=connection.database_type,
            database_host=connection.database_host,
            database_port=connection.database_port or 0,
            database_user=connection.database_user,
            database_password=self._decrypt_password(connection.password_encrypted) if include_password else None,
            database_name=connection.database_name,
            database_schema=connection.database_schema,
            use_ssl=bool(connection.use_ssl),
        )
