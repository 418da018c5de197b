"""
Flask CLI commands for the family tree
"""

import sys

import click
from flask import current_app

from family_tree.database import init_db
from family_tree.services.exceptions import ServiceError
from family_tree.services.family_tree_service import family_tree_service
from family_tree.shared.models import Member, RelationshipPath, TreeNode


def describe_member(member: Member) -> str:
    """One-line member description: 'Name (b. 1950)'"""
    if member.birth_year:
        return f"{member.full_name} (b. {member.birth_year})"
    return member.full_name


def format_tree(node: TreeNode, indent: str = "  ") -> list[str]:
    """Render a tree node and its descendants as indented outline lines"""
    line = f"{indent * node.generation}{describe_member(node.member)}"
    if node.spouse:
        line += f" ⚭ {describe_member(node.spouse)}"
    lines = [line]
    for child in node.children:
        lines.extend(format_tree(child, indent))
    return lines


def format_path(result: RelationshipPath) -> str:
    return " → ".join(member.full_name for member in result.path)


def register_commands(app):
    """Register all CLI commands with the Flask app"""

    owner_option = click.option('--owner', default=None,
                                help='Owning account (defaults to DEFAULT_OWNER_ID)')

    @app.cli.command('init-db')
    def init_db_command():
        """Create the members and relationships tables."""
        init_db()
        click.echo("✅ Database tables created")

    @app.cli.command('tree')
    @owner_option
    def tree_command(owner):
        """Print the family tree as an indented outline."""
        owner = owner or current_app.config['DEFAULT_OWNER_ID']
        forest = family_tree_service.build_tree(owner)

        if not forest:
            click.echo("No family members recorded")
            return

        for root in forest:
            for line in format_tree(root):
                click.echo(line)

    @app.cli.command('kinship')
    @click.argument('member_a')
    @click.argument('member_b')
    @owner_option
    def kinship_command(member_a, member_b, owner):
        """Show how MEMBER_B is related to MEMBER_A."""
        owner = owner or current_app.config['DEFAULT_OWNER_ID']
        try:
            result = family_tree_service.resolve(owner, member_a, member_b)
        except ServiceError as e:
            click.echo(f"❌ {e}")
            sys.exit(1)

        click.echo(f"{result.member_b.full_name} is the {result.relationship} of {result.member_a.full_name}")
        click.echo(f"Degree: {result.degree}")
        click.echo(f"Path: {format_path(result)}")

    @app.cli.command('relatives')
    @click.argument('member_id')
    @owner_option
    def relatives_command(member_id, owner):
        """List everyone related to MEMBER_ID, closest first."""
        owner = owner or current_app.config['DEFAULT_OWNER_ID']
        try:
            results = family_tree_service.resolve_all(owner, member_id)
        except ServiceError as e:
            click.echo(f"❌ {e}")
            sys.exit(1)

        if not results:
            click.echo("No relatives found")
            return

        for result in results:
            click.echo(f"{result.member_b.full_name}: {result.relationship} (degree {result.degree})")
