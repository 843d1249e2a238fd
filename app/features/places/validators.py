def validate_title(title: str) -> str:
    title = title.strip()
    if len(title) == 0:
        raise ValueError("Title is required")
    if len(title) > 200:
        raise ValueError("Title too long (max length 200 chars)")
    return title


def validate_description(description: str) -> str:
    description = description.strip()
    if len(description) == 0:
        raise ValueError("Description is required")
    if len(description) > 2000:
        raise ValueError("Description too long (max length 2000 chars)")
    return description


def validate_address(address: str) -> str:
    address = address.strip()
    if len(address) == 0:
        raise ValueError("Address is required")
    return address
