"""
Print an admin users file entry with a bcrypt password hash
"""

import argparse
import getpass
import json
import os
import sys

# Add the parent directory to the path so we can import our modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.auth import hash_password


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email")
    parser.add_argument("--name")
    parser.add_argument("--role", default="Editor")
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        print("❌ Passwords do not match")
        sys.exit(1)

    entry = {"email": args.email, "passwordHash": hash_password(password), "role": args.role}
    if args.name:
        entry["name"] = args.name
    print(json.dumps(entry, indent=2))


if __name__ == "__main__":
    main()
