"""
Script to create an admin login
Run this to create the first admin user
"""

import sys
import asyncio
import argparse
import uuid
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clubhouse.database import connect_db, disconnect_db
from clubhouse.auth import hash_password, generate_random_password
from clubhouse.auth.policy import Role
from clubhouse.services.user_service import UserService


async def create_admin(username: str, password: str = None):
    """
    Create an admin user with no member profile
    
    Args:
        username: Login name
        password: Password (if None, will generate random)
    """
    
    await connect_db()
    
    try:
        if await UserService.username_taken(username):
            print(f"❌ User {username} already exists!")
            return
        
        generated = password is None
        if generated:
            password = generate_random_password(12)
        
        await UserService.insert_user(str(uuid.uuid4()), username, hash_password(password), Role.admin.value)
        
        print("✅ Admin created successfully!")
        print(f"   Username: {username}")
        
        if generated:
            print(f"   Password: {password}")
            print("   ⚠️  IMPORTANT: Save this password and change it after first login.")
        else:
            print("   Password: (custom password set)")
    
    finally:
        await disconnect_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin login")
    parser.add_argument("username")
    parser.add_argument("--password", "-p", help="Password (random if omitted)")
    args = parser.parse_args()
    
    asyncio.run(create_admin(args.username, args.password))
