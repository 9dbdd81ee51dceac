import copy

import pytest

from stubflow.core.models.shapes import parse_api

WIDGETS_API = {
    "metadata": {"protocol": "json", "targetPrefix": "Widgets_20240101", "jsonVersion": "1.1", "apiVersion": "2024-01-01"},
    "operations": {
        "DescribeWidget": {
            "http": {"method": "POST", "requestUri": "/widgets/{WidgetId}"},
            "input": {"shape": "DescribeWidgetInput"},
            "output": {"shape": "DescribeWidgetOutput"},
            "errors": [{"shape": "WidgetNotFound"}],
        },
        "DeleteWidget": {
            "http": {"method": "DELETE", "requestUri": "/widgets/{WidgetId}"},
            "input": {"shape": "DeleteWidgetInput"},
        },
    },
    "shapes": {
        "DescribeWidgetInput": {
            "type": "structure",
            "required": ["WidgetId"],
            "members": {
                "WidgetId": {"shape": "String", "location": "uri", "locationName": "WidgetId"},
                "Verbose": {"shape": "Boolean", "location": "querystring", "locationName": "verbose"},
            },
        },
        "DescribeWidgetOutput": {
            "type": "structure",
            "required": ["Widget"],
            "members": {
                "Widget": {"shape": "Widget"},
                "Owner": {"shape": "Owner"},
                "NextToken": {"shape": "String"},
            },
        },
        "Widget": {
            "type": "structure",
            "required": ["Details"],
            "members": {
                "Name": {"shape": "WidgetName"},
                "Size": {"shape": "Integer"},
                "Weight": {"shape": "Double"},
                "Enabled": {"shape": "Boolean"},
                "CreatedAt": {"shape": "Timestamp"},
                "Payload": {"shape": "Blob"},
                "Tags": {"shape": "TagList"},
                "Attributes": {"shape": "AttributeMap"},
                "Details": {"shape": "Details"},
            },
        },
        "Details": {
            "type": "structure",
            "members": {"Color": {"shape": "String"}, "Parts": {"shape": "Integer"}},
        },
        "Owner": {"type": "structure", "members": {"OwnerId": {"shape": "String"}}},
        "TagList": {"type": "list", "member": {"shape": "Tag"}},
        "Tag": {"type": "structure", "members": {"Key": {"shape": "String"}, "Value": {"shape": "String"}}},
        "AttributeMap": {"type": "map", "key": {"shape": "String"}, "value": {"shape": "Integer"}},
        "DeleteWidgetInput": {"type": "structure", "members": {"WidgetId": {"shape": "String", "location": "uri"}}},
        "WidgetNotFound": {"type": "structure", "members": {"Message": {"shape": "String"}}},
        "WidgetName": {"type": "string"},
        "String": {"type": "string"},
        "Integer": {"type": "integer"},
        "Double": {"type": "double"},
        "Boolean": {"type": "boolean"},
        "Timestamp": {"type": "timestamp"},
        "Blob": {"type": "blob"},
    },
}

OBJECTS_API = {
    "metadata": {"protocol": "rest-xml", "apiVersion": "2006-03-01"},
    "operations": {
        "HeadObject": {
            "http": {"method": "HEAD", "requestUri": "/{Bucket}/{Key+}"},
            "input": {"shape": "HeadObjectRequest"},
            "output": {"shape": "HeadObjectOutput"},
            "errors": [{"shape": "NoSuchKey"}],
        },
        "ListBuckets": {
            "http": {"method": "GET", "requestUri": "/"},
            "output": {"shape": "ListBucketsOutput"},
        },
    },
    "shapes": {
        "HeadObjectRequest": {
            "type": "structure",
            "required": ["Bucket", "Key"],
            "members": {
                "Bucket": {"shape": "BucketName", "location": "uri", "locationName": "Bucket"},
                "Key": {"shape": "ObjectKey", "location": "uri", "locationName": "Key"},
            },
        },
        "HeadObjectOutput": {
            "type": "structure",
            "members": {
                "ContentLength": {"shape": "ContentLength", "location": "header", "locationName": "Content-Length"},
                "ETag": {"shape": "ETag", "location": "header", "locationName": "ETag"},
                "LastModified": {"shape": "LastModified", "location": "header", "locationName": "Last-Modified"},
                "Metadata": {"shape": "Metadata", "location": "headers", "locationName": "x-amz-meta-"},
            },
        },
        "ListBucketsOutput": {
            "type": "structure",
            "members": {"Buckets": {"shape": "Buckets"}, "Owner": {"shape": "Owner"}},
        },
        "Buckets": {"type": "list", "member": {"shape": "Bucket", "locationName": "Bucket"}},
        "Bucket": {
            "type": "structure",
            "members": {"Name": {"shape": "BucketName"}, "CreationDate": {"shape": "CreationDate"}},
        },
        "Owner": {"type": "structure", "members": {"DisplayName": {"shape": "DisplayName"}, "ID": {"shape": "ID"}}},
        "Metadata": {"type": "map", "key": {"shape": "MetadataKey"}, "value": {"shape": "MetadataValue"}},
        "NoSuchKey": {"type": "structure", "members": {}},
        "BucketName": {"type": "string"},
        "ObjectKey": {"type": "string"},
        "ContentLength": {"type": "long"},
        "ETag": {"type": "string"},
        "LastModified": {"type": "timestamp"},
        "CreationDate": {"type": "timestamp"},
        "DisplayName": {"type": "string"},
        "ID": {"type": "string"},
        "MetadataKey": {"type": "string"},
        "MetadataValue": {"type": "string"},
    },
}


def widgets_model(protocol: str = "json") -> dict:
    raw = copy.deepcopy(WIDGETS_API)
    raw["metadata"]["protocol"] = protocol
    return raw


@pytest.fixture
def widgets_api():
    return parse_api(widgets_model())


@pytest.fixture
def objects_api():
    return parse_api(copy.deepcopy(OBJECTS_API))


@pytest.fixture
def api_for():
    def _make(protocol: str):
        return parse_api(widgets_model(protocol))

    return _make
