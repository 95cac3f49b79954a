from app.core.storage import create_backend, LocalStore
from app.services.seed import seed_sample_data

def main():
    store = LocalStore(create_backend())
    seeded = seed_sample_data(store)
    print("✅ Storage ready" + (" (sample data written)" if seeded else ""))

if __name__ == "__main__":
    main()
