from svc_notes.server import main

raise SystemExit(main())
