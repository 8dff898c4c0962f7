from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.common.responses import envelope

from .serializers import (
    GroupSerializer,
    GroupListSerializer,
    GroupCreateSerializer,
    GroupUpdateSerializer,
    AddMemberSerializer,
    MemberSerializer,
    GroupBalanceSerializer,
)

from apps.groups.services import (
    create_group,
    list_groups,
    get_group_by_id,
    update_group,
    delete_group,
    add_member,
    remove_member,
    get_group_members,
    get_group_balances,
)


class GroupViewSet(viewsets.ViewSet):
    """
    ViewSet for Group operations.

    All business logic is handled by services; service exceptions
    propagate to the project exception handler.

    list: Groups the user created or belongs to
    create: Create a new group (plan limits apply)
    retrieve: Get a specific group with members
    update: Update a group (creator only)
    partial_update: Partially update a group (creator only)
    destroy: Delete a group (creator only)
    """

    permission_classes = [IsAuthenticated]

    def _group_response(self, group_id, message=None, status_code=status.HTTP_200_OK):
        group = get_group_by_id(group_id=group_id)
        serializer = GroupSerializer(group, context={'request': self.request})
        return envelope({'group': serializer.data}, message, status_code)

    @extend_schema(responses=GroupListSerializer(many=True))
    def list(self, request):
        groups = list_groups(user=request.user)
        serializer = GroupListSerializer(groups, many=True)
        return envelope({'groups': serializer.data})

    @extend_schema(request=GroupCreateSerializer, responses={201: GroupSerializer})
    def create(self, request):
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            name=serializer.validated_data['name'],
            owner=request.user,
            description=serializer.validated_data['description'],
            currency=serializer.validated_data['currency'],
        )

        return self._group_response(group.id, 'Group created successfully', status.HTTP_201_CREATED)

    @extend_schema(responses=GroupSerializer)
    def retrieve(self, request, pk=None):
        group = get_group_by_id(group_id=pk, user=request.user)
        serializer = GroupSerializer(group, context={'request': request})
        return envelope({'group': serializer.data})

    @extend_schema(request=GroupUpdateSerializer, responses=GroupSerializer)
    def update(self, request, pk=None):
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = update_group(
            group_id=pk,
            user=request.user,
            name=serializer.validated_data.get('name'),
            description=serializer.validated_data.get('description'),
        )

        return self._group_response(group.id, 'Group updated successfully')

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        delete_group(group_id=pk, user=request.user)
        return envelope(message='Group deleted successfully')

    @extend_schema(request=AddMemberSerializer, responses=GroupSerializer)
    @action(detail=True, methods=['post'], url_path='members')
    def add_member(self, request, pk=None):
        """Add a member to the group (creator only)."""
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        add_member(
            group_id=pk,
            added_by=request.user,
            name=serializer.validated_data['name'],
            email=serializer.validated_data['email'],
        )

        return self._group_response(pk, 'Member added successfully')

    @extend_schema(responses=MemberSerializer(many=True))
    @add_member.mapping.get
    def members(self, request, pk=None):
        """List the group's members in join order."""
        members = get_group_members(group_id=pk, user=request.user)
        return envelope({'members': MemberSerializer(members, many=True).data})

    @extend_schema(request=None, responses=GroupSerializer)
    @action(detail=True, methods=['delete'], url_path=r'members/(?P<member_id>[^/.]+)')
    def remove_member(self, request, pk=None, member_id=None):
        """Remove a member by member id or linked user id (creator only)."""
        remove_member(group_id=pk, member_id=member_id, removed_by=request.user)
        return self._group_response(pk, 'Member removed successfully')

    @extend_schema(responses=GroupBalanceSerializer(many=True))
    @action(detail=True, methods=['get'])
    def balances(self, request, pk=None):
        """Net balance of every user in the group."""
        group = get_group_by_id(group_id=pk, user=request.user)
        serializer = GroupBalanceSerializer(get_group_balances(group=group), many=True)
        return envelope({'balances': serializer.data})
