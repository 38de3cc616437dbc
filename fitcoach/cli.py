# fitcoach/cli.py
import argparse
import logging
import sys

from pydantic import ValidationError

from .core import config
from .core.errors import ApiError, StoreError
from .client.api import FitnessCoachClient
from .client.export import render_plan_text, write_export
from .client.narration import narration_script
from .client.session import CoachSession
from .client.store import FileStorage, PlanStore
from .schemas.profile import UserProfile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fitcoach", description="AI fitness and diet plan coach")
    parser.add_argument("--api-url", default=config.FITCOACH_API_URL)
    parser.add_argument("--state-dir", default=config.FITCOACH_STATE_DIR)
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="create a new 7-day plan")
    gen.add_argument("--name", required=True)
    gen.add_argument("--age", type=int, required=True)
    gen.add_argument("--gender", required=True, choices=["male", "female", "other"])
    gen.add_argument("--height", type=int, required=True, help="cm")
    gen.add_argument("--weight", type=int, required=True, help="kg")
    gen.add_argument("--goal", required=True,
                     choices=["weight-loss", "muscle-gain", "maintain", "endurance", "strength"])
    gen.add_argument("--fitness-level", required=True, choices=["beginner", "intermediate", "advanced"])
    gen.add_argument("--workout-location", required=True, choices=["home", "gym", "outdoor"])
    gen.add_argument("--dietary-preference", required=True,
                     choices=["vegetarian", "non-vegetarian", "vegan", "keto"])
    gen.add_argument("--medical-history")
    gen.add_argument("--stress-level", choices=["low", "moderate", "high"])

    show = sub.add_parser("show", help="print the saved plan")
    show.add_argument("--no-quote", action="store_true")
    sub.add_parser("regenerate", help="replace the saved plan with a new one")
    sub.add_parser("quote", help="print a motivational quote")

    image = sub.add_parser("image", help="generate an exercise or meal image")
    image.add_argument("kind", choices=["exercise", "meal"])
    image.add_argument("prompt")

    export = sub.add_parser("export", help="write the plan as a text file")
    export.add_argument("--out", default=".")

    speak = sub.add_parser("speak", help="read the plan aloud into a wav file")
    speak.add_argument("--tab", choices=["workout", "diet"], default="workout")
    speak.add_argument("--out", default="plan.wav")
    speak.add_argument("--voice")

    sub.add_parser("reset", help="forget the saved profile and plan")

    serve = sub.add_parser("serve", help="run the API server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def _profile_from_args(args) -> UserProfile:
    return UserProfile(
        name=args.name,
        age=args.age,
        gender=args.gender,
        height=args.height,
        weight=args.weight,
        goal=args.goal,
        fitnessLevel=args.fitness_level,
        workoutLocation=args.workout_location,
        dietaryPreference=args.dietary_preference,
        medicalHistory=args.medical_history,
        stressLevel=args.stress_level,
    )


def _require_plan(session: CoachSession) -> bool:
    if session.restore():
        return True
    print("No saved plan. Run `fitcoach generate` first.", file=sys.stderr)
    return False


def run(args, session: CoachSession) -> int:
    if args.command == "generate":
        plan = session.submit(_profile_from_args(args))
        print(render_plan_text(session.state.profile, plan))
    elif args.command == "show":
        if not _require_plan(session):
            return 1
        if not args.no_quote:
            print(f'"{session.daily_quote()}"\n')
        print(render_plan_text(session.state.profile, session.state.plan))
    elif args.command == "regenerate":
        if not _require_plan(session):
            return 1
        plan = session.regenerate()
        print(render_plan_text(session.state.profile, plan))
    elif args.command == "quote":
        print(session.daily_quote())
    elif args.command == "image":
        detail = session.show_detail_image(args.kind, args.prompt)
        if detail.error:
            print(f"Failed to generate image: {detail.error}", file=sys.stderr)
            return 1
        print(detail.image_url)
    elif args.command == "export":
        if not _require_plan(session):
            return 1
        path = write_export(session.state.profile, session.state.plan, args.out)
        print(f"Plan exported to {path}")
    elif args.command == "speak":
        if not _require_plan(session):
            return 1
        text = narration_script(session.state.plan, args.tab)
        wav = session.client.synthesize_speech(text, args.voice)
        with open(args.out, "wb") as f:
            f.write(wav)
        print(f"Wrote {len(wav)} bytes to {args.out}")
    elif args.command == "reset":
        session.start_over()
        print("Saved plan cleared.")
    return 0


def main(argv=None) -> int:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("fitcoach.main:app", host=args.host, port=args.port)
        return 0

    session = CoachSession(FitnessCoachClient(args.api_url), PlanStore(FileStorage(args.state_dir)))
    try:
        return run(args, session)
    except ValidationError as e:
        print(f"Invalid profile: {e}", file=sys.stderr)
        return 2
    except (ApiError, StoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
