"""
Database Helper Functions

This module contains helper functions for storing models in DynamoDB tables using the AWS SDK.
The boto3 resources are not thread safe, so each thread gets its own resource.
"""

import logging
import os
import threading
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

import boto3
from boto3.resources.base import ServiceResource
from botocore.exceptions import ClientError
from pydantic import BaseModel as PydanticBaseModel
from pydantic import Field

logger = logging.getLogger(__name__)
T = TypeVar("T", bound="BaseModel")

type_map = {
    str: "S",
    int: "N",
    float: "N",
    bytes: "B",
}


class MetaBaseModelService(type):
    """
    Metaclass for BaseModelService classes.

    This metaclass manages the per-thread table and resource access for the service class.
    """

    def __init__(cls: type["BaseModelService"], *args) -> None:
        super().__init__(*args)
        cls._local = threading.local()

    @property
    def table(cls: type["BaseModelService"]) -> ServiceResource:
        """
        Returns the DynamoDB table associated with the service class for the current thread.

        If the table doesn't exist, it attempts to create it.
        """
        if getattr(cls._local, "table", None) is None:
            cls._local.table = cls.get_table()
        return cls._local.table

    @property
    def resource(cls: type["BaseModelService"]) -> ServiceResource:
        """Returns the DynamoDB resource of the current thread."""
        if getattr(cls._local, "resource", None) is None:
            session = boto3.session.Session()
            cls._local.resource = session.resource(
                "dynamodb", region_name=os.getenv("AWS_REGION", "us-east-1")
            )
        return cls._local.resource

    @property
    def table_name(cls: type["BaseModelService"]) -> str:
        """
        Returns the name of the DynamoDB table associated with the service class.

        The table name is derived from the class name in lowercase.
        """
        return cls.clazz.__name__.lower()

    @property
    def clazz(cls: type["BaseModelService"]) -> type["BaseModel"]:
        """
        Returns the Pydantic model class associated with the service class.

        This is retrieved from the first type argument of the service class's base class.
        """
        return cls.__orig_bases__[0].__args__[0]


class BaseModelService(Generic[T], metaclass=MetaBaseModelService):
    """
    Base model service that other model services can inherit from.
    It provides the common functionality to create the table and insert models in it.
    """

    @classmethod
    def get_table(cls) -> ServiceResource:
        """
        Returns the DynamoDB table associated with the service class.

        If the table doesn't exist, it attempts to create it.
        """
        try:
            table = cls.resource.Table(cls.table_name)
            if not table.creation_date_time:
                raise AssertionError("Table doesn't exist")
        except ClientError as err:
            if err.response["Error"]["Code"] == "ResourceNotFoundException":
                return cls.create_table()
            raise
        return table

    @classmethod
    def create_table(cls) -> ServiceResource:
        """Creates a DynamoDB table"""
        try:
            key_schema = cls.clazz.key_schema
            if not key_schema:
                raise AssertionError("Key schema doesn't exist")
            dy_key_schema = []
            attribute_definitions = []
            for attr_name in key_schema:
                dy_key_schema.append(
                    {
                        "AttributeName": attr_name,
                        "KeyType": "HASH" if attr_name == key_schema[0] else "RANGE",
                    }
                )
                python_type = cls.clazz.model_fields[attr_name].annotation
                if issubclass(python_type, Enum):
                    python_type = str
                attribute_definitions.append(
                    {"AttributeName": attr_name, "AttributeType": type_map[python_type]}
                )
            table = cls.resource.create_table(
                TableName=cls.table_name,
                KeySchema=dy_key_schema,
                AttributeDefinitions=attribute_definitions,
                ProvisionedThroughput={
                    "ReadCapacityUnits": 10,
                    "WriteCapacityUnits": 10,
                },
            )
            table.wait_until_exists()
        except ClientError as err:
            logger.error(
                "Couldn't create table %s. Here's why: %s: %s",
                cls.table_name,
                err.response["Error"]["Code"],
                err.response["Error"]["Message"],
            )
            raise
        return table

    @classmethod
    def insert_one(cls, item: T) -> T:
        """Insert one item in the table"""
        cls.table.put_item(Item=item.dynamo_dict())
        return item


class BaseModel(PydanticBaseModel):
    """
    The BaseModel class acts as a base class for all stored model classes.
    Any model class that needs to be stored in the database should inherit from this class.
    """

    key_schema: ClassVar[list[str]] = None

    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())

    def dynamo_dict(self) -> dict[str, Any]:
        """Returns a dict that dynamo will understand, without the empty values"""
        return {k: to_dynamo(v) for k, v in self.model_dump().items() if v is not None}


def to_dynamo(value: Any) -> Any:
    """Convert a value to a type accepted by dynamo, floats must be Decimal"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo(v) for v in value]
    return value
