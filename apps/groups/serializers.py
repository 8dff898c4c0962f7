from rest_framework import serializers
from .models import Group, Member, GroupBalance
from apps.accounts.serializers import UserMinimalSerializer
from apps.transactions.models import Currency


class MemberSerializer(serializers.ModelSerializer):
    """Serializer for group members."""

    user_id = serializers.PrimaryKeyRelatedField(source='user', read_only=True)

    class Meta:
        model = Member
        fields = ['id', 'user_id', 'name', 'email', 'joined_at', 'is_active']
        read_only_fields = fields


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    created_by = UserMinimalSerializer(read_only=True)
    members = MemberSerializer(many=True, read_only=True)
    member_count = serializers.SerializerMethodField()
    is_admin = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'currency',
            'created_by',
            'members',
            'member_count',
            'is_admin',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return len(obj.members.all())

    def get_is_admin(self, obj):
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.is_admin(request.user)
        return False


class GroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    created_by = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'currency',
            'created_by',
            'member_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return len(obj.members.all())


class GroupCreateSerializer(serializers.Serializer):
    """Validate group creation input."""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    currency = serializers.ChoiceField(
        choices=Currency.choices,
        required=False,
        allow_null=True,
        default=None
    )

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Group name cannot be blank.")
        return value


class GroupUpdateSerializer(serializers.Serializer):
    """Validate group update input; omitted fields stay unchanged."""

    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Group name cannot be blank.")
        return value


class AddMemberSerializer(serializers.Serializer):
    """Validate member addition input."""

    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(max_length=255)


class GroupBalanceSerializer(serializers.ModelSerializer):
    """Net balance of one user in a group."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupBalance
        fields = ['user', 'balance', 'updated_at']
        read_only_fields = fields
