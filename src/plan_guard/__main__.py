from plan_guard.main import main

if __name__ == "__main__":
    main()
