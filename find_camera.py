from cinefeel.services.capture_service import probe_cameras

print("🔍 Scanning camera ports...")

for index, status in probe_cameras(5).items():
    if status is None:
        print(f"❌ Index {index}: No camera.")
    elif status == "no-frames":
        print(f"⚠️ Index {index}: Camera found but no image (could be OBS/virtual camera).")
    else:
        print(f"✅ Index {index}: Camera WORKING! (Resolution: {status})")
