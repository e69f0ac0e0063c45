"""MariaDB connector; the wire protocol and type codes are MySQL's."""
from dbimport.connectors.mysql.mysql_database_service import MySQLConnectionManager, MySQLDatabaseService


class MariaDBConnectionManager(MySQLConnectionManager):
    db_type = "mariadb"


class MariaDBDatabaseService(MySQLDatabaseService):
    db_name = "mariadb"
    connection_manager_class = MariaDBConnectionManager
