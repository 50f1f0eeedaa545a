"""
Flask CLI commands for salon administration.

Commands:
- flask list-salons: List salon accounts with subscription status
- flask create-salon: Create a salon and its owner
- flask renew-salon: Record a subscription payment
- flask toggle-salon: Enable/disable a salon
- flask add-staff / flask remove-staff: Manage salon users
- flask migrate-accounts: Apply pending account migrations
"""

import re
from datetime import date

import click
from flask import current_app

from salon.services import subscription_service

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def _accounts():
    return current_app.extensions['accounts']


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('list-salons')
    def list_salons():
        """List every salon account."""
        accounts = _accounts().list_accounts()
        if not accounts:
            click.echo('No salons yet.')
            return
        for account in accounts:
            status = subscription_service.subscription_status(account)
            state = 'ACTIVE' if status['is_active'] else 'EXPIRED'
            color = 'green' if status['is_active'] else 'red'
            click.echo(
                f"{account.id}  {account.name:<30} {account.login_email:<30} "
                + click.style(state, fg=color)
                + f"  {status['days_remaining']}j restants  users={len(account.users or [])}"
            )

    @app.cli.command('create-salon')
    @click.option('--name', prompt=True, help='Salon name')
    @click.option('--owner', prompt=True, help='Owner full name')
    @click.option('--phone', prompt=True, help='Owner phone')
    @click.option('--email', prompt=True, help='Owner login email')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Owner password')
    @click.option('--address', default=None, help='Salon address')
    @click.option('--last-payment', 'last_payment', default=None, help='Last payment date (YYYY-MM-DD)')
    def create_salon(name, owner, phone, email, password, address, last_payment):
        """Create a salon with its owner user."""
        if not re.match(EMAIL_PATTERN, email):
            click.echo(click.style('❌ Invalid email. Use format: user@example.com', fg='red'))
            return

        if len(password) < 6:
            click.echo(click.style('❌ Password must be at least 6 characters.', fg='red'))
            return

        if _accounts().email_in_use(email):
            click.echo(click.style(f'❌ Email already in use: {email}', fg='red'))
            return

        try:
            paid_on = date.fromisoformat(last_payment) if last_payment else None
        except ValueError:
            click.echo(click.style(f'❌ Invalid date: {last_payment}', fg='red'))
            return

        account = _accounts().create_account(
            name=name, owner_name=owner, phone=phone, email=email,
            password=password, last_payment_date=paid_on, address=address,
        )
        click.echo(click.style('\n✅ Salon created!', fg='green', bold=True))
        click.echo(f'   Name: {account.name}')
        click.echo(f'   ID: {account.id}')
        click.echo(f'   Owner: {account.owner_name} <{account.login_email}>')

    @app.cli.command('renew-salon')
    @click.argument('tenant_id')
    def renew_salon(tenant_id):
        """Record a payment today and reactivate the salon."""
        if not _accounts().get_account(tenant_id):
            click.echo(click.style(f'❌ Unknown salon: {tenant_id}', fg='red'))
            return
        _accounts().renew_subscription(tenant_id)
        click.echo(click.style(f'✅ Subscription renewed for {tenant_id}', fg='green'))

    @app.cli.command('toggle-salon')
    @click.argument('tenant_id')
    @click.option('--active/--inactive', default=True, help='New administrative state')
    def toggle_salon(tenant_id, active):
        """Enable or disable a salon regardless of payments."""
        if not _accounts().get_account(tenant_id):
            click.echo(click.style(f'❌ Unknown salon: {tenant_id}', fg='red'))
            return
        _accounts().toggle_active(tenant_id, active)
        click.echo(f"Salon {tenant_id} is now {'active' if active else 'inactive'}")

    @app.cli.command('add-staff')
    @click.argument('tenant_id')
    @click.option('--name', prompt=True, help='Staff member name')
    @click.option('--email', prompt=True, help='Staff login email')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Staff password')
    @click.option('--phone', default=None, help='Staff phone')
    def add_staff(tenant_id, name, email, password, phone):
        """Add a staff user to a salon."""
        user = _accounts().add_staff(tenant_id, name, email, password, phone)
        if user is None:
            click.echo(click.style('❌ Unknown salon or email already in use.', fg='red'))
            return
        click.echo(click.style(f'✅ Staff added: {user.name} ({user.id})', fg='green'))

    @app.cli.command('remove-staff')
    @click.argument('tenant_id')
    @click.argument('user_id')
    def remove_staff(tenant_id, user_id):
        """Remove a staff user (owners are kept)."""
        if not _accounts().remove_staff(tenant_id, user_id):
            click.echo(click.style(f'❌ Unknown salon: {tenant_id}', fg='red'))
            return
        click.echo(f'Salon {tenant_id} updated.')

    @app.cli.command('migrate-accounts')
    def migrate_accounts():
        """Apply pending account schema migrations."""
        changed = _accounts().migrate_accounts()
        click.echo(f'Schema version {_accounts().schema_version()}, {changed} account(s) updated.')
