import pytest
from decimal import Decimal
from apps.accounts.models import User, SubscriptionStatus
from apps.expenses.models import Expense, Participant
from apps.groups.models import Group, GroupBalance, Member
from apps.groups.services import (
    create_group,
    delete_group,
    update_group,
    get_group_by_id,
    list_groups,
    add_member,
    remove_member,
    get_group_members,
    compute_group_balances,
    recalculate_balances,
    GroupNotFoundError,
    MemberNotFoundError,
    NotAdminError,
    DuplicateMemberError,
    CannotRemoveCreatorError,
)
from apps.subscriptions.services import (
    GroupLimitExceededError,
    MemberLimitExceededError,
    SubscriptionInactiveError,
)
from apps.expenses.services import create_expense


@pytest.mark.django_db
class TestCreateGroup:

    def test_creator_is_first_member(self, group, group_owner):
        member = group.members.get()
        assert member.user == group_owner
        assert member.email == group_owner.email
        assert GroupBalance.objects.filter(group=group, user=group_owner).exists()

    def test_increments_groups_created(self, group, group_owner):
        group_owner.refresh_from_db()
        assert group_owner.groups_created == 1

    def test_currency_defaults_to_billing_currency(self, group):
        # owner is in India
        assert group.currency == 'INR'

    def test_limit_enforced(self, group_owner):
        for i in range(3):
            create_group(name=f'Group {i}', owner=group_owner)

        with pytest.raises(GroupLimitExceededError):
            create_group(name='One too many', owner=group_owner)

        assert Group.objects.filter(created_by=group_owner).count() == 3

    def test_canceled_subscription_denied(self, group_owner):
        group_owner.subscription_status = SubscriptionStatus.CANCELED
        group_owner.save()

        with pytest.raises(SubscriptionInactiveError):
            create_group(name='Nope', owner=group_owner)

        group_owner.refresh_from_db()
        assert group_owner.groups_created == 0


@pytest.mark.django_db
class TestGroupCrud:

    def test_delete_releases_slot(self, group, group_owner):
        delete_group(group_id=group.id, user=group_owner)

        group_owner.refresh_from_db()
        assert group_owner.groups_created == 0
        assert not Group.objects.filter(id=group.id).exists()

    def test_delete_releases_usage_counters(self, group_with_member, group_owner, member_user):
        create_expense(paid_by=group_owner, description='Rent', amount=100, group_id=group_with_member.id)
        create_expense(paid_by=group_owner, description='Power', amount=40, group_id=group_with_member.id)
        create_expense(paid_by=member_user, description='Internet', amount=30, group_id=group_with_member.id)
        create_expense(paid_by=group_owner, description='Lunch', amount=12)
        add_member(group_id=group_with_member.id, added_by=group_owner, name='Pending', email='pending@example.com')

        delete_group(group_id=group_with_member.id, user=group_owner)

        group_owner.refresh_from_db()
        member_user.refresh_from_db()
        assert group_owner.total_expenses == 1
        assert group_owner.members_added == 0
        assert member_user.total_expenses == 0
        assert not Expense.objects.filter(group_id=group_with_member.id).exists()

    def test_delete_keeps_usage_of_other_groups(self, group_with_member, group_owner):
        other = create_group(name='Office', owner=group_owner)
        add_member(group_id=other.id, added_by=group_owner, name='Colleague', email='colleague@example.com')

        delete_group(group_id=group_with_member.id, user=group_owner)

        group_owner.refresh_from_db()
        assert group_owner.members_added == 1
        assert group_owner.groups_created == 1

    def test_delete_unknown_group_id(self, group_owner):
        with pytest.raises(GroupNotFoundError):
            delete_group(group_id='not-a-uuid', user=group_owner)

    def test_delete_requires_creator(self, group_with_member, member_user):
        with pytest.raises(NotAdminError):
            delete_group(group_id=group_with_member.id, user=member_user)

    def test_update_requires_creator(self, group_with_member, member_user):
        with pytest.raises(NotAdminError):
            update_group(group_id=group_with_member.id, user=member_user, name='Hijacked')

    def test_update_name(self, group, group_owner):
        updated = update_group(group_id=group.id, user=group_owner, name='  New name ')
        assert updated.name == 'New name'

    def test_creator_is_immutable(self, group, other_user):
        group.created_by = other_user
        with pytest.raises(ValueError):
            group.save()

    def test_get_hidden_from_non_members(self, group, other_user):
        with pytest.raises(GroupNotFoundError):
            get_group_by_id(group_id=group.id, user=other_user)

    def test_list_includes_member_groups(self, group_with_member, member_user, other_user):
        assert list(list_groups(user=member_user)) == [group_with_member]
        assert list(list_groups(user=other_user)) == []


@pytest.mark.django_db
class TestMembership:

    def test_add_links_existing_user(self, group_with_member, member_user, group_owner):
        member = group_with_member.members.get(email=member_user.email)
        assert member.user == member_user
        assert group_with_member.has_member(member_user)

        group_owner.refresh_from_db()
        assert group_owner.members_added == 1
        assert group_owner.groups_created == 1

    def test_add_unregistered_email(self, group, group_owner):
        member = add_member(
            group_id=group.id,
            added_by=group_owner,
            name='Pending',
            email='Pending@Example.com',
        )
        assert member.user is None
        assert member.email == 'pending@example.com'

    def test_duplicate_email_case_insensitive(self, group_with_member, group_owner):
        with pytest.raises(DuplicateMemberError):
            add_member(
                group_id=group_with_member.id,
                added_by=group_owner,
                name='Again',
                email='MEMBER@example.com',
            )

    def test_only_admin_adds(self, group_with_member, member_user):
        with pytest.raises(NotAdminError):
            add_member(
                group_id=group_with_member.id,
                added_by=member_user,
                name='Friend',
                email='friend@example.com',
            )

    def test_member_cap(self, group, group_owner):
        # creator is member 1 of 5
        for i in range(4):
            add_member(group_id=group.id, added_by=group_owner, name=f'M{i}', email=f'm{i}@example.com')

        with pytest.raises(MemberLimitExceededError):
            add_member(group_id=group.id, added_by=group_owner, name='Sixth', email='sixth@example.com')

        assert group.members.count() == 5

    def test_remove_by_member_id(self, group_with_member, group_owner, member_user):
        member = group_with_member.members.get(user=member_user)
        remove_member(group_id=group_with_member.id, member_id=member.id, removed_by=group_owner)

        assert not group_with_member.has_member(member_user)
        group_owner.refresh_from_db()
        assert group_owner.members_added == 0

    def test_remove_by_user_id(self, group_with_member, group_owner, member_user):
        remove_member(group_id=group_with_member.id, member_id=member_user.id, removed_by=group_owner)
        assert not Member.objects.filter(group=group_with_member, user=member_user).exists()

    def test_remove_unknown_member(self, group, group_owner, other_user):
        with pytest.raises(MemberNotFoundError):
            remove_member(group_id=group.id, member_id=other_user.id, removed_by=group_owner)

    def test_creator_cannot_be_removed(self, group, group_owner):
        with pytest.raises(CannotRemoveCreatorError):
            remove_member(group_id=group.id, member_id=group_owner.id, removed_by=group_owner)

    def test_missing_group(self, group_owner, other_user):
        with pytest.raises(GroupNotFoundError):
            add_member(
                group_id=other_user.id,
                added_by=group_owner,
                name='X',
                email='x@example.com',
            )


@pytest.mark.django_db
class TestBalances:

    def test_unpaid_shares_move_balances(self, group_with_member, group_owner, member_user):
        expense = Expense.objects.create(
            description='Dinner',
            amount=Decimal('100.00'),
            paid_by=group_owner,
            group=group_with_member,
        )
        Participant.objects.create(expense=expense, user=group_owner, share=Decimal('60.00'))
        Participant.objects.create(expense=expense, user=member_user, share=Decimal('40.00'))

        nets = compute_group_balances(group_with_member)
        assert nets[group_owner.id] == Decimal('40.00')
        assert nets[member_user.id] == Decimal('-40.00')

    def test_paid_shares_are_ignored(self, group_with_member, group_owner, member_user):
        expense = Expense.objects.create(
            description='Taxi',
            amount=Decimal('30.00'),
            paid_by=member_user,
            group=group_with_member,
        )
        Participant.objects.create(expense=expense, user=group_owner, share=Decimal('30.00'), paid=True)

        recalculate_balances(group_with_member)

        balances = {b.user_id: b.balance for b in GroupBalance.objects.filter(group=group_with_member)}
        assert balances == {group_owner.id: Decimal('0.00'), member_user.id: Decimal('0.00')}


@pytest.mark.django_db
class TestGetGroupMembers:

    def test_members_in_join_order(self, group_with_member, group_owner, member_user):
        members = get_group_members(group_id=group_with_member.id, user=member_user)
        assert [m.user for m in members] == [group_owner, member_user]

    def test_hidden_from_non_members(self, group, other_user):
        with pytest.raises(GroupNotFoundError):
            get_group_members(group_id=group.id, user=other_user)

    def test_malformed_group_id(self, group_owner):
        with pytest.raises(GroupNotFoundError):
            get_group_members(group_id='bogus', user=group_owner)
