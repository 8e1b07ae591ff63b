from rest_framework import serializers


class ArchivedUserSerializer(serializers.Serializer):
    """
    Archived member as shown to admins.

    Expects users from get_archived_users_with_details, which carry the
    months_inactive and unpaid_invoices_count attributes.
    """

    id = serializers.UUIDField()
    email = serializers.EmailField(allow_null=True)
    forename = serializers.CharField(allow_null=True)
    surname = serializers.CharField(allow_null=True)
    lastLogin = serializers.DateTimeField(source='last_login', allow_null=True)
    archivedAt = serializers.DateTimeField(source='archived_at')
    monthsInactive = serializers.IntegerField(source='months_inactive', allow_null=True)
    unpaidInvoicesCount = serializers.IntegerField(source='unpaid_invoices_count')


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
