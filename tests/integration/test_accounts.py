"""
Integration tests for salon accounts and staff users.
"""

from datetime import date, timedelta

from salon.models import UserRole
from salon.services.subscription_service import days_remaining, is_active


class TestCreateAccount:

    def test_create_and_log_in(self, accounts):
        """Creating a salon makes its owner able to log in."""
        salon = accounts.create_account(
            name='Salon A', owner_name='Alice', phone='+000',
            email='a@x.com', password='pw1234', last_payment_date=date.today(),
        )

        result = accounts.verify_login('a@x.com', 'pw1234')

        assert result is not None
        assert result.tenant.id == salon.id
        assert result.user.role == UserRole.OWNER.value

    def test_defaults(self, accounts, tenant1):
        assert tenant1.subscription_active is True
        assert tenant1.subscription_amount == 25000
        assert tenant1.subscription_days == 30
        assert tenant1.created_at == date.today()
        assert tenant1.last_payment_date == date.today()

    def test_exactly_one_owner_mirroring_owner_fields(self, tenant1):
        owners = [u for u in tenant1.users if u.is_owner()]
        assert len(owners) == 1
        owner = owners[0]
        assert owner.name == tenant1.owner_name
        assert owner.login_email == tenant1.login_email
        assert owner.phone == tenant1.phone
        assert owner.tenant_id == tenant1.id
        assert owner.password_hash == tenant1.password_hash

    def test_password_is_hashed(self, tenant1):
        assert tenant1.password_hash != 'password123'
        assert tenant1.password_hash.startswith('h_')

    def test_persisted_in_creation_order(self, accounts, tenant1, tenant2):
        ids = [a.id for a in accounts.list_accounts()]
        assert ids == [tenant1.id, tenant2.id]
        assert tenant1.id != tenant2.id


class TestVerifyLogin:

    def test_wrong_password(self, accounts, tenant1):
        assert accounts.verify_login(tenant1.login_email, 'wrong') is None

    def test_unknown_email(self, accounts, tenant1):
        assert accounts.verify_login('nobody@test.com', 'password123') is None

    def test_staff_login(self, accounts, tenant1):
        staff = accounts.add_staff(tenant1.id, 'Eve', 'eve@test.com', 'evepass1')

        result = accounts.verify_login('eve@test.com', 'evepass1')

        assert result.user.id == staff.id
        assert result.user.role == UserRole.STAFF.value
        assert result.tenant.id == tenant1.id

    def test_legacy_account_login(self, accounts, store, legacy_account_data):
        """Accounts stored without users still authenticate as owner."""
        store.set(accounts.accounts_key, [legacy_account_data])

        result = accounts.verify_login('legacy@test.com', 'oldpass99')

        assert result is not None
        assert result.tenant.id == 'legacy-salon'
        assert result.user.role == UserRole.OWNER.value
        assert result.user.name == 'Dora'

    def test_scrypt_accounts(self, store):
        from salon.services.account_service import AccountService
        service = AccountService(store, hash_scheme='scrypt')
        service.create_account('Salon S', 'Sam', '+000', 's@x.com', 'strongpass')

        assert service.verify_login('s@x.com', 'strongpass').user.is_owner()
        assert service.verify_login('s@x.com', 'weakpass') is None


class TestStaffLifecycle:

    def test_add_staff(self, accounts, tenant1):
        staff = accounts.add_staff(tenant1.id, 'Eve', 'eve@test.com', 'evepass1', phone='+111')

        assert staff is not None
        assert staff.role == UserRole.STAFF.value
        assert staff.tenant_id == tenant1.id
        assert staff.password_hash != 'evepass1'
        stored = accounts.get_account(tenant1.id)
        assert [u.id for u in stored.users][-1] == staff.id

    def test_unknown_tenant(self, accounts):
        assert accounts.add_staff('missing', 'Eve', 'eve@test.com', 'evepass1') is None

    def test_email_unique_across_salons(self, accounts, tenant1, tenant2):
        assert accounts.add_staff(tenant1.id, 'Eve', 'eve@test.com', 'evepass1') is not None
        assert accounts.add_staff(tenant2.id, 'Eve bis', 'eve@test.com', 'other123') is None

    def test_email_of_other_owner_rejected(self, accounts, tenant1, tenant2):
        assert accounts.add_staff(tenant1.id, 'X', tenant2.login_email, 'xpass123') is None

    def test_email_of_legacy_owner_rejected(self, accounts, store, tenant1, legacy_account_data):
        raw = store.get(accounts.accounts_key, [])
        store.set(accounts.accounts_key, raw + [legacy_account_data])

        assert accounts.add_staff(tenant1.id, 'X', 'legacy@test.com', 'xpass123') is None

    def test_remove_staff(self, accounts, tenant1):
        staff = accounts.add_staff(tenant1.id, 'Eve', 'eve@test.com', 'evepass1')

        assert accounts.remove_staff(tenant1.id, staff.id) is True

        users = accounts.get_account(tenant1.id).users
        assert staff.id not in [u.id for u in users]
        assert accounts.verify_login('eve@test.com', 'evepass1') is None

    def test_owner_is_never_removed(self, accounts, tenant1):
        owner = tenant1.owner

        assert accounts.remove_staff(tenant1.id, owner.id) is True

        users = accounts.get_account(tenant1.id).users
        assert [u.id for u in users if u.is_owner()] == [owner.id]

    def test_remove_unknown_user_still_reports_true(self, accounts, tenant1):
        assert accounts.remove_staff(tenant1.id, 'nobody') is True

    def test_remove_from_unknown_tenant(self, accounts):
        assert accounts.remove_staff('missing', 'nobody') is False

    def test_scenario(self, accounts, tenant1, tenant2):
        """Add, duplicate elsewhere, remove, then try to remove the owner."""
        staff = accounts.add_staff(tenant1.id, 'Eve', 'eve@test.com', 'evepass1')
        assert staff is not None
        assert accounts.add_staff(tenant2.id, 'Eve', 'eve@test.com', 'evepass1') is None

        accounts.remove_staff(tenant1.id, staff.id)
        accounts.remove_staff(tenant1.id, tenant1.owner.id)

        users = accounts.get_account(tenant1.id).users
        assert len(users) == 1
        assert users[0].role == UserRole.OWNER.value

    def test_one_owner_after_many_operations(self, accounts, tenant1):
        created = [
            accounts.add_staff(tenant1.id, f'S{i}', f's{i}@test.com', 'staffpass')
            for i in range(4)
        ]
        for user in created[::2] + [tenant1.owner]:
            accounts.remove_staff(tenant1.id, user.id)

        users = accounts.get_account(tenant1.id).users
        assert sum(1 for u in users if u.is_owner()) == 1
        assert len(users) == 3

    def test_add_staff_to_legacy_account_stored_after_startup(self, accounts, store,
                                                              legacy_account_data):
        """Migration already ran; the legacy owner is created on the spot."""
        assert accounts.schema_version() == 1
        store.set(accounts.accounts_key, [legacy_account_data])

        staff = accounts.add_staff('legacy-salon', 'Eve', 'eve@test.com', 'evepass1')

        users = accounts.get_account('legacy-salon').users
        assert [u.role for u in users] == [UserRole.OWNER.value, UserRole.STAFF.value]
        assert users[0].name == 'Dora'
        assert users[0].id != 'legacy-salon'
        assert users[1].id == staff.id
        assert accounts.verify_login('legacy@test.com', 'oldpass99').user.id == users[0].id

    def test_remove_staff_on_legacy_account_stored_after_startup(self, accounts, store,
                                                                 legacy_account_data):
        store.set(accounts.accounts_key, [legacy_account_data])

        assert accounts.remove_staff('legacy-salon', 'nobody') is True

        users = accounts.get_account('legacy-salon').users
        assert len(users) == 1
        assert users[0].is_owner()
        assert users[0].login_email == 'legacy@test.com'


class TestUndecodableAccounts:

    def test_skipped_on_read(self, accounts, store, tenant1):
        bad = {'id': 'bad-date', 'name': 'Salon Bad', 'last_payment_date': '15/01/2024'}
        store.set(accounts.accounts_key, store.get(accounts.accounts_key, []) + [bad])

        assert [a.id for a in accounts.list_accounts()] == [tenant1.id]

    def test_kept_when_another_salon_changes(self, accounts, store, tenant1):
        bad = {'id': 'bad-date', 'name': 'Salon Bad', 'last_payment_date': '15/01/2024'}
        store.set(accounts.accounts_key, store.get(accounts.accounts_key, []) + [bad])

        accounts.add_staff(tenant1.id, 'Eve', 'eve@test.com', 'evepass1')
        accounts.renew_subscription(tenant1.id)

        stored = store.get(accounts.accounts_key, [])
        assert [a['id'] for a in stored] == [tenant1.id, 'bad-date']
        assert stored[1] == bad
        assert len(accounts.get_account(tenant1.id).users) == 2


class TestSubscriptionAdmin:

    def test_renewal_resets_expiry(self, accounts, expired_tenant):
        assert not is_active(expired_tenant)

        accounts.renew_subscription(expired_tenant.id)

        renewed = accounts.get_account(expired_tenant.id)
        assert is_active(renewed)
        assert days_remaining(renewed) == 30

    def test_renew_unknown_is_noop(self, accounts, tenant1):
        before = [a.to_dict() for a in accounts.list_accounts()]
        accounts.renew_subscription('missing')
        assert [a.to_dict() for a in accounts.list_accounts()] == before

    def test_toggle_active(self, accounts, tenant1):
        accounts.toggle_active(tenant1.id, False)
        assert not is_active(accounts.get_account(tenant1.id))

        accounts.toggle_active(tenant1.id, True)
        assert is_active(accounts.get_account(tenant1.id))

    def test_renew_reactivates_disabled_salon(self, accounts, tenant1):
        accounts.toggle_active(tenant1.id, False)
        accounts.renew_subscription(tenant1.id)
        assert accounts.get_account(tenant1.id).subscription_active is True


class TestAdmin:

    def test_default_admin_seeded_on_first_use(self, accounts, store):
        assert store.get(accounts.admin_key, None) is None

        admin = accounts.get_admin()

        assert admin.email == 'admin@leaderbright.com'
        assert store.get(accounts.admin_key, None)['email'] == admin.email

    def test_verify_admin(self, accounts):
        assert accounts.verify_admin('admin@leaderbright.com', 'admin2025')
        assert not accounts.verify_admin('admin@leaderbright.com', 'wrong')
        assert not accounts.verify_admin('other@leaderbright.com', 'admin2025')


class TestMigration:

    def test_legacy_accounts_gain_owner(self, accounts, store, legacy_account_data):
        store.set(accounts.schema_key, 0)
        store.set(accounts.accounts_key, [legacy_account_data])

        changed = accounts.migrate_accounts()

        assert changed == 1
        account = accounts.get_account('legacy-salon')
        assert account.owner.login_email == 'legacy@test.com'
        assert account.owner.name == 'Dora'
        assert accounts.schema_version() == 1
        assert accounts.verify_login('legacy@test.com', 'oldpass99').user.id == account.owner.id

    def test_migration_is_idempotent(self, accounts, store, legacy_account_data):
        store.set(accounts.schema_key, 0)
        store.set(accounts.accounts_key, [legacy_account_data])
        accounts.migrate_accounts()
        first = accounts.get_account('legacy-salon').owner.id

        assert accounts.migrate_accounts() == 0
        assert accounts.get_account('legacy-salon').owner.id == first

    def test_migrated_accounts_untouched(self, accounts, store, tenant1):
        store.set(accounts.schema_key, 0)
        assert accounts.migrate_accounts() == 0
        assert accounts.get_account(tenant1.id).owner.id == tenant1.owner.id

    def test_app_start_runs_migration(self, app):
        assert app.extensions['accounts'].schema_version() == 1
