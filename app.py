"""
Streamlit frontend for Cosmic Community Creator.

This is the main entry point for the application. It handles the session gate,
the Sanctuary of star portals, and the generation chambers that create and link
media to each star system.

Environment Variables:
- GEMINI_API_KEY or GOOGLE_GENAI_API_KEY: Required for the generation chambers
- SUPABASE_URL / SUPABASE_ANON_KEY: (Optional) Remote media storage, gallery and user records
- STRIPE_SECRET_KEY / STRIPE_PRICE_ID: (Optional) Enables checkout on the landing page
- APP_ORIGIN: (Optional) Public URL used for checkout redirects
- STARNATION_DATA_DIR: (Optional) Directory for local media stores (default: .starnation)
"""

import os
from io import BytesIO

import streamlit as st
from dotenv import load_dotenv

from starnation import (
    ChamberState,
    MediaLibrary,
    animate,
    build_animation_prompt,
    build_vision_prompt,
    current_user,
    edit_image_with_prompt,
    find_star,
    generate_image_with_imagen,
    get_catalog,
    get_chamber_spec,
    get_chamber_specs,
    get_logger,
    list_recent_images,
    list_recent_videos,
    load_image_bytes,
    login,
    logout,
)
from starnation.catalog import THEME_COLORS, orbit_positions, split_portals
from starnation.chambers import (
    CELESTIAL_FORGE,
    STATUS_ERROR,
    STATUS_SUCCESS,
    STELLAR_ANIMATOR,
    VISION_WEAVER,
)
from starnation.config import get_app_origin, get_stripe_price_id, get_video_poll_settings
from starnation.errors import (
    GenerationError,
    PaymentError,
    PollCancelledError,
    PollTimeoutError,
    StorageAccessDeniedError,
    StorageError,
)
from starnation.gemini_client import has_api_key
from starnation.payments import create_checkout_session, wait_for_payment
from starnation.supabase_client import get_supabase_client
from starnation.utils import extension_for_mime, parse_data_url, read_media_url
from starnation.video_animator import loading_message

# Load environment variables from .env file
load_dotenv()

logger = get_logger("app")

# ---------- Streamlit Page Configuration ----------
st.set_page_config(
    page_title="Cosmic Community Creator",
    page_icon="✨",
    layout="wide"
)

# ---------- Sidebar Label Hack: Show "Sanctuary ✨" Instead of File Name ----------
st.markdown(
    """
    <style>
    [data-testid="stSidebarNav"] li:first-child a span {
        visibility: hidden;
    }
    [data-testid="stSidebarNav"] li:first-child a span::after {
        content: '✨ Sanctuary';
        visibility: visible;
        display: inline-block;
    }
    .orbit-map {
        position: relative;
        height: 520px;
        margin: 0 auto 1rem auto;
        border-radius: 50%;
        background: radial-gradient(ellipse at center, rgba(76, 29, 149, 0.35), transparent 70%);
    }
    .orbit-map span {
        position: absolute;
        transform: translate(-50%, -50%);
        font-weight: 600;
        text-shadow: 0 0 12px currentColor;
        white-space: nowrap;
    }
    </style>
    """,
    unsafe_allow_html=True,
)


# ---------- Cached Resources ----------
@st.cache_resource
def _supabase():
    return get_supabase_client()


@st.cache_data(ttl=60, show_spinner=False)
def _recent_images():
    client = _supabase()
    return list_recent_images(client) if client is not None else []


@st.cache_data(ttl=60, show_spinner=False)
def _recent_videos():
    client = _supabase()
    return list_recent_videos(client) if client is not None else []


# ---------- Helpers ----------
def _media_source(url):
    """st.image / st.video take bytes for inline data URLs, the URL otherwise."""
    if url and url.startswith("data:"):
        return parse_data_url(url)[0]
    return url


def _library(user):
    return MediaLibrary.for_user(user, _supabase())


def _systems(user):
    if "star_systems" not in st.session_state:
        st.session_state["star_systems"] = _library(user).load(get_catalog())
    return st.session_state["star_systems"]


def _chamber_state(key):
    states = st.session_state.setdefault("chamber_states", {})
    if key not in states:
        states[key] = ChamberState()
    return states[key]


def _open_chamber(key, star=None):
    """Open a chamber, optionally seeded from a star's context."""
    st.session_state["active_chamber"] = key
    st.session_state["context_star_id"] = star.id if star else None
    if star is not None and key == CELESTIAL_FORGE:
        st.session_state["chamber_prompt"] = build_vision_prompt(star)
    elif star is not None and key == STELLAR_ANIMATOR:
        st.session_state["chamber_prompt"] = build_animation_prompt(star)
    else:
        st.session_state["chamber_prompt"] = ""
    _chamber_state(key).reset()
    # Prompt widgets keep their own state; drop it so the new seed shows
    for widget_key in ("weaver_prompt", "forge_prompt", "animator_prompt"):
        st.session_state.pop(widget_key, None)


def _close_chamber():
    st.session_state["cancel_video"] = True
    st.session_state["active_chamber"] = None
    st.session_state["context_star_id"] = None
    st.session_state["chamber_prompt"] = ""


def _api_key_notice():
    st.warning(
        "⚠️ An API key is required for this chamber. "
        "Enter your Google AI API key in the sidebar or set GEMINI_API_KEY."
    )


# ---------- Landing Page ----------
def _render_payment_status():
    params = st.query_params
    if params.get("canceled") == "true":
        st.info("Checkout was canceled. You can return whenever you are ready.")

    session_id = params.get("session_id")
    if not session_id:
        return
    checked = st.session_state.setdefault("payment_checked", {})
    if session_id not in checked:
        with st.status("Confirming your payment...", expanded=False) as status:
            try:
                result = wait_for_payment(session_id)
            except PaymentError as exc:
                status.update(label="❌ Payment check unavailable", state="error")
                st.error(str(exc))
                return
            checked[session_id] = result.done
            if result.done:
                status.update(label="✅ Payment confirmed", state="complete")
            else:
                status.update(label="⏳ Payment still pending", state="error")
    if checked[session_id]:
        st.success("🌟 Thank you! Your payment was confirmed.")
    else:
        st.warning("We could not confirm your payment yet. Refresh this page in a moment.")


def _render_checkout():
    if not get_stripe_price_id():
        return
    with st.expander("💫 Support the Sanctuary", expanded=False):
        name = st.text_input("Creator Name for checkout", key="checkout_name")
        if st.button("Continue to Checkout", key="checkout_button"):
            try:
                url = create_checkout_session(_supabase(), name, get_app_origin())
            except PaymentError as exc:
                st.error(str(exc))
            else:
                st.link_button("Open secure checkout", url, type="primary")


def _render_gallery():
    st.subheader("🌌 Recent Visions from the Community")
    try:
        images = _recent_images()
        videos = _recent_videos()
    except StorageAccessDeniedError as exc:
        st.warning(f"⚠️ {exc}")
        return

    if not images and not videos:
        st.caption("No community visions yet. Be the first to create one.")
        return

    for row_start in range(0, len(images), 4):
        cols = st.columns(4)
        for col, item in zip(cols, images[row_start:row_start + 4]):
            with col:
                st.image(item.url, caption=f"{item.star_id or ''} · {item.user_id or ''}", use_container_width=True)

    if videos:
        st.markdown("**Animations**")
        for row_start in range(0, len(videos), 2):
            cols = st.columns(2)
            for col, item in zip(cols, videos[row_start:row_start + 2]):
                with col:
                    st.video(item.url)
                    st.caption(f"{item.star_id or ''} · {item.user_id or ''}")


def render_landing():
    st.title("✨ Cosmic Community Creator")
    st.markdown("_Compose your own vision of the cosmic star nations_")

    _render_payment_status()

    with st.form("login_form"):
        name = st.text_input("Creator Name", placeholder="Enter Your Creator Name")
        st.text_input("Password", type="password", placeholder="Enter Your Password")
        entered = st.form_submit_button("Enter the Sanctuary", type="primary", use_container_width=True)
    if entered:
        try:
            user = login(st.session_state, name)
        except ValueError as exc:
            st.warning(f"⚠️ {exc}")
        else:
            logger.info(f"Creator entered the Sanctuary: {user}")
            st.rerun()

    _render_checkout()
    _render_gallery()


# ---------- Sanctuary ----------
def _render_sidebar(user):
    with st.sidebar:
        st.markdown(f"**Creator:** {user}")
        if st.button("🚪 Leave the Sanctuary", use_container_width=True):
            logout(st.session_state)
            st.rerun()

        st.markdown("**API Keys & Settings**")
        key_input = st.text_input(
            "Google AI API Key",
            type="password",
            value="",
            help="Your API key from Google AI Studio (ai.google.dev)"
        )
        if key_input:
            os.environ["GEMINI_API_KEY"] = key_input
        if has_api_key():
            st.caption("✅ API key available")
        else:
            st.caption("⚠️ No API key set. Chambers are locked.")
        if _supabase() is not None:
            st.caption("✅ Cloud storage connected")
        else:
            st.caption("💾 Visions are stored on this machine")

        st.markdown("**Chambers**")
        for spec in get_chamber_specs():
            if st.button(f"{spec.icon} {spec.label}", key=f"open_{spec.key}", use_container_width=True):
                _open_chamber(spec.key)
                st.rerun()


def _render_orbit_map(central, orbiting):
    labels = []
    if central is not None:
        color = THEME_COLORS.get(central.theme, "#ffffff")
        labels.append(f'<span style="left:50%;top:50%;color:{color};font-size:1.4rem;">✦ {central.label}</span>')
    for star, (dx, dy) in zip(orbiting, orbit_positions(len(orbiting))):
        color = THEME_COLORS.get(star.theme, "#ffffff")
        labels.append(
            f'<span style="left:calc(50% + {dx:.0f}px);top:calc(50% + {dy:.0f}px);color:{color};">'
            f"✧ {star.label}</span>"
        )
    st.markdown(f'<div class="orbit-map">{"".join(labels)}</div>', unsafe_allow_html=True)


def _render_portal(star, key_prefix):
    if star.image:
        st.image(_media_source(star.image), use_container_width=True)
    color = THEME_COLORS.get(star.theme, "#ffffff")
    st.markdown(f'<h4 style="color:{color};margin:0;">{star.label}</h4>', unsafe_allow_html=True)
    st.caption(star.lore)
    if st.button("Enter Portal", key=f"{key_prefix}_{star.id}", use_container_width=True):
        st.session_state["selected_star_id"] = star.id
        st.rerun()


def render_portals(systems):
    st.title("✨ The Sanctuary")
    st.markdown("_Choose a star nation to step through its portal_")

    central, orbiting = split_portals(systems)
    _render_orbit_map(central, orbiting)

    if central is not None:
        _, middle, _ = st.columns([1, 1, 1])
        with middle:
            _render_portal(central, "central")

    for row_start in range(0, len(orbiting), 3):
        cols = st.columns(3)
        for col, star in zip(cols, orbiting[row_start:row_start + 3]):
            with col:
                _render_portal(star, "portal")


def render_detail(star):
    if st.button("← Return to the Sanctuary"):
        st.session_state["selected_star_id"] = None
        st.rerun()

    color = THEME_COLORS.get(star.theme, "#ffffff")
    st.markdown(f'<h1 style="color:{color};">{star.label}</h1>', unsafe_allow_html=True)
    st.markdown(f"_{star.lore}_")

    col_img, col_text = st.columns([1, 1])
    with col_img:
        if star.image:
            st.image(_media_source(star.image), use_container_width=True)
        else:
            st.caption("Visual frequency could not be resolved.")
    with col_text:
        st.write(star.details)
        if st.button("✨ Channel Vision", type="primary", use_container_width=True):
            _open_chamber(CELESTIAL_FORGE, star)
            st.rerun()
        if st.button("🎞️ Animate Vision", use_container_width=True, disabled=not star.image):
            _open_chamber(STELLAR_ANIMATOR, star)
            st.rerun()

    if star.video:
        st.subheader("🎞️ Animation")
        st.video(_media_source(star.video))

    if star.images:
        st.subheader("🖼️ Channeled Visions")
        for row_start in range(0, len(star.images), 3):
            cols = st.columns(3)
            for col, url in zip(cols, star.images[row_start:row_start + 3]):
                with col:
                    st.image(_media_source(url), use_container_width=True)


# ---------- Chambers ----------
def _link_image(user, star, data, mime):
    try:
        systems = _library(user).link_image(_systems(user), star.id, data, mime)
    except StorageError as exc:
        logger.error(f"Linking image to {star.id} failed: {exc}")
        st.error(f"Failed to save image. Error: {exc}")
        return
    st.session_state["star_systems"] = systems
    st.session_state["selected_star_id"] = star.id
    _close_chamber()
    st.rerun()


def _link_video(user, star, data):
    try:
        systems = _library(user).link_video(_systems(user), star.id, data, "video/mp4")
    except StorageError as exc:
        logger.error(f"Linking video to {star.id} failed: {exc}")
        st.error(f"Failed to save video. Error: {exc}")
        return
    st.session_state["star_systems"] = systems
    st.session_state["selected_star_id"] = star.id
    _close_chamber()
    st.rerun()


def _pick_target_star(systems, context_star, key):
    """The context star if there is one, otherwise the creator's choice."""
    if context_star is not None:
        return context_star
    labels = {star.id: star.label for star in systems}
    star_id = st.selectbox(
        "Link this vision to",
        [None] + list(labels),
        format_func=lambda sid: "Select a star to save this vision" if sid is None else labels[sid],
        key=key,
    )
    return find_star(systems, star_id) if star_id else None


def render_vision_weaver(spec, state):
    uploaded = st.file_uploader(
        "Choose an image to reshape",
        type=["png", "jpg", "jpeg", "webp"],
        help="Supported formats: PNG, JPG, JPEG, WEBP"
    )
    prompt = st.text_area(
        "How should the vision change?",
        value=st.session_state.get("chamber_prompt", ""),
        key="weaver_prompt",
        placeholder="e.g. surround the figure with a halo of violet starlight",
    )
    if not has_api_key():
        _api_key_notice()
        return

    if st.button("🌀 Weave New Vision", type="primary", disabled=state.is_loading):
        if not uploaded:
            st.warning("⚠️ Please upload an image first.")
        elif not prompt.strip():
            st.warning("⚠️ Please describe how the vision should change.")
        else:
            image_bytes, mime = load_image_bytes(uploaded)
            state.start()
            with st.spinner("Weaving the threads of your vision..."):
                try:
                    state.succeed(edit_image_with_prompt(image_bytes, mime, prompt))
                except (ValueError, GenerationError) as exc:
                    logger.error(f"Vision Weaver failed: {exc}")
                    state.fail(str(exc))

    if state.status == STATUS_ERROR:
        st.error(state.error)
    elif state.status == STATUS_SUCCESS:
        col_src, col_dst = st.columns(2)
        with col_src:
            if uploaded:
                st.image(uploaded, caption="Original", use_container_width=True)
        woven, woven_mime = state.result
        with col_dst:
            st.image(woven, caption="Woven vision", use_container_width=True)
        st.download_button(
            "⬇️ Download vision",
            woven,
            file_name=f"woven-vision.{extension_for_mime(woven_mime, 'png')}",
            mime=woven_mime,
        )


def render_celestial_forge(user, spec, state, context_star):
    prompt = st.text_area(
        "Describe the vision to forge",
        value=st.session_state.get("chamber_prompt", ""),
        key="forge_prompt",
        height=140,
    )
    aspect_ratio = st.radio(
        "Aspect ratio",
        spec.aspect_ratios,
        index=spec.aspect_ratios.index(spec.default_aspect_ratio),
        horizontal=True,
        key="forge_aspect_ratio",
    )
    if not has_api_key():
        _api_key_notice()
        return

    if st.button("✨ Forge Vision", type="primary", disabled=state.is_loading):
        state.start()
        with st.spinner("The forge is gathering starlight..."):
            try:
                state.succeed(generate_image_with_imagen(prompt, aspect_ratio))
            except (ValueError, GenerationError) as exc:
                logger.error(f"Celestial Forge failed: {exc}")
                state.fail(str(exc))

    if state.status == STATUS_ERROR:
        st.error(state.error)
    elif state.status == STATUS_SUCCESS:
        st.image(state.result, caption="Forged vision", use_container_width=True)
        target = _pick_target_star(_systems(user), context_star, "forge_target")
        label = f"🔗 Link Vision to {target.label}" if target else "Select a star to save this vision"
        if st.button(label, disabled=target is None, use_container_width=True):
            _link_image(user, target, state.result, "image/jpeg")


def _animator_source(context_star, uploaded):
    """Return (image_bytes, mime) for the animation source, or None."""
    if uploaded is not None:
        return load_image_bytes(uploaded)
    if context_star is not None and context_star.image:
        raw = read_media_url(context_star.image)
        return load_image_bytes(BytesIO(raw))
    return None


def render_stellar_animator(user, spec, state, context_star):
    uploaded = None
    if context_star is not None and context_star.image:
        st.image(_media_source(context_star.image), caption=f"Source: {context_star.label}", width=320)
    else:
        uploaded = st.file_uploader(
            "Choose an image to animate",
            type=["png", "jpg", "jpeg", "webp"],
            help="Supported formats: PNG, JPG, JPEG, WEBP"
        )
    prompt = st.text_area(
        "Describe the motion",
        value=st.session_state.get("chamber_prompt", ""),
        key="animator_prompt",
    )
    aspect_ratio = st.radio(
        "Aspect ratio",
        spec.aspect_ratios,
        index=spec.aspect_ratios.index(spec.default_aspect_ratio),
        horizontal=True,
        key="animator_aspect_ratio",
    )
    if not has_api_key():
        _api_key_notice()
        return

    if st.button("🎞️ Animate Vision", type="primary", disabled=state.is_loading):
        try:
            source = _animator_source(context_star, uploaded)
        except Exception as exc:
            logger.error(f"Could not load animation source: {exc}")
            source = None
        if source is None:
            st.warning("⚠️ Please provide an image to animate.")
        else:
            image_bytes, mime = source
            interval, max_attempts = get_video_poll_settings()
            st.session_state["cancel_video"] = False
            state.start()
            with st.status(loading_message(0), expanded=True) as status:
                status.write("🚀 Submitting your vision to the animator (this may take several minutes)...")

                def _on_attempt(attempt, _operation):
                    elapsed = attempt * interval
                    status.update(label=loading_message(elapsed))
                    status.write(f"⏳ Still rendering ({elapsed:.0f}s)...")

                try:
                    video = animate(
                        image_bytes,
                        mime,
                        prompt,
                        aspect_ratio=aspect_ratio,
                        interval=interval,
                        max_attempts=max_attempts,
                        should_cancel=lambda: st.session_state.get("cancel_video", False),
                        on_attempt=_on_attempt,
                    )
                except PollCancelledError as exc:
                    logger.info(f"Animation cancelled: {exc}")
                    state.reset()
                    status.update(label="Animation cancelled", state="error")
                except (PollTimeoutError, GenerationError) as exc:
                    logger.error(f"Stellar Animator failed: {exc}")
                    state.fail(str(exc))
                    status.update(label="❌ The animation could not be completed", state="error")
                else:
                    state.succeed(video)
                    status.update(label="✅ Complete! Your animation is ready.", state="complete")

    if state.status == STATUS_ERROR:
        st.error(state.error)
    elif state.status == STATUS_SUCCESS:
        st.video(state.result)
        col_link, col_again = st.columns(2)
        with col_link:
            target = _pick_target_star(_systems(user), context_star, "animator_target")
            label = f"🔗 Link Animation to {target.label}" if target else "Select a star to save this animation"
            if st.button(label, disabled=target is None, use_container_width=True):
                _link_video(user, target, state.result)
        with col_again:
            if st.button("🔁 Create Another", use_container_width=True):
                state.reset()
                st.rerun()


def render_chamber(user, systems):
    key = st.session_state.get("active_chamber")
    spec = get_chamber_spec(key)
    state = _chamber_state(key)
    context_star = find_star(systems, st.session_state.get("context_star_id") or "")

    with st.container(border=True):
        col_title, col_close = st.columns([5, 1])
        with col_title:
            st.header(f"{spec.icon} {spec.label}")
            st.caption(spec.description)
        with col_close:
            st.button("✖ Close", key="close_chamber", on_click=_close_chamber, use_container_width=True)

        if key == VISION_WEAVER:
            render_vision_weaver(spec, state)
        elif key == CELESTIAL_FORGE:
            render_celestial_forge(user, spec, state, context_star)
        elif key == STELLAR_ANIMATOR:
            render_stellar_animator(user, spec, state, context_star)


def render_sanctuary(user):
    systems = _systems(user)
    _render_sidebar(user)

    if st.session_state.get("active_chamber"):
        render_chamber(user, systems)
        return

    selected = find_star(systems, st.session_state.get("selected_star_id") or "")
    if selected is not None:
        render_detail(selected)
    else:
        render_portals(systems)


# ---------- Main UI ----------
creator = current_user(st.session_state)
if creator:
    render_sanctuary(creator)
else:
    render_landing()

st.caption("A community creation space for the cosmic star nations ✨")
